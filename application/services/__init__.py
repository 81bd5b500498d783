from .conversion_service import ConversionService
from .history_service import ConversionHistory
from .service_factory import ServiceFactory

__all__ = ['ConversionHistory', 'ConversionService', 'ServiceFactory']
