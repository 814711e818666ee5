"""业务服务模块"""

from campus_checkin.services.checkin import CheckinService
from campus_checkin.services.commands import CommandService
from campus_checkin.services.geocoding import GeocodingService
from campus_checkin.services.notification import NotificationService
from campus_checkin.services.portal import PortalService

__all__ = [
    "CheckinService",
    "CommandService",
    "GeocodingService",
    "NotificationService",
    "PortalService",
]
