"""Check-in service"""

import logging
from dataclasses import dataclass

from campus_checkin.core.errors import (
    AuthenticationError,
    InvalidRecord,
    MalformedUpstreamResponse,
    UserNotFound,
)
from campus_checkin.core.timezone import now
from campus_checkin.models.user_record import UserRecord
from campus_checkin.repositories.user_repository import UserRepository
from campus_checkin.services.geocoding import GeocodingService
from campus_checkin.services.notification import NotificationService
from campus_checkin.services.portal import CheckinResult, PortalService
from campus_checkin.services.record_updates import with_skip_removed
from campus_checkin.utils.formatter import format_checkin_result, format_error, format_record
from campus_checkin.utils.time_slot import in_checkin_window, minutes_since_midnight

logger = logging.getLogger(__name__)

SKIP_MESSAGE = "⏭️ 今日跳过打卡"


@dataclass
class SweepOutcome:
    """单个用户的定时打卡结果"""

    chat_id: int
    success: bool
    message: str


class CheckinService:
    """Check-in service"""

    def __init__(
        self,
        notifier: NotificationService,
        user_repo: UserRepository | None = None,
        portal: PortalService | None = None,
        geocoder: GeocodingService | None = None,
    ):
        self.notifier = notifier
        self.user_repo = user_repo if user_repo is not None else UserRepository()
        self.portal = portal if portal is not None else PortalService()
        self.geocoder = geocoder if geocoder is not None else GeocodingService()

    async def checkin(self, record: UserRecord) -> CheckinResult:
        """
        Perform one check-in with a fresh portal session

        Args:
            record: User record

        Returns:
            Portal result

        Raises:
            AuthenticationError: Portal login failed
            MalformedUpstreamResponse: Portal or AMap response could not be parsed
        """
        cookie = await self.portal.authenticate(record.username, record.password)
        address = await self.geocoder.reverse(record.location)
        return await self.portal.submit_checkin(cookie, record, address.raw)

    async def scheduled_checkin(self, current_minutes: int | None = None) -> list[SweepOutcome]:
        """
        定时巡检：找出处于打卡窗口内的用户并打卡

        先遍历全部用户完成跳过扣减，遍历结束后再逐个打卡。

        Args:
            current_minutes: 当前时间（一天中的分钟数），默认取本地时间

        Returns:
            打卡结果列表

        Raises:
            InvalidRecord: 存在结构错误的用户记录，巡检中止
        """
        if current_minutes is None:
            current_minutes = minutes_since_midnight(now())

        logger.info(f"[自动打卡] 定时巡检 {current_minutes // 60:02d}:{current_minutes % 60:02d}")

        queued: list[UserRecord] = []
        try:
            async for record in self.user_repo.list_all():
                if not in_checkin_window(record.checkin_hour, record.checkin_minute, current_minutes):
                    continue

                if record.skip_count > 0:
                    updated = with_skip_removed(record)
                    await self.user_repo.put(record.chat_id, updated)
                    logger.info(f"[自动打卡] 跳过: 会话 {record.chat_id} 剩余跳过 {updated.skip_count} 天")
                    await self.notifier.send(record.chat_id, SKIP_MESSAGE)
                    await self.notifier.send(record.chat_id, format_record(updated), markdown=True)
                    continue

                queued.append(record)
        except UserNotFound as e:
            logger.error(f"[自动打卡] 巡检中用户记录消失: 会话 {e.chat_id}，本次巡检中止")
            return []
        except InvalidRecord as e:
            logger.error(f"[自动打卡] 用户记录结构错误: {e.key} {e.issues}，本次巡检中止")
            raise

        outcomes = []
        for record in queued:
            logger.info(f"[自动打卡] 正在打卡: 会话 {record.chat_id} 用户 {record.username}")
            outcomes.append(await self._checkin_and_notify(record))

        logger.info(f"[自动打卡] 巡检完成: 处理了 {len(outcomes)} 个用户")
        return outcomes

    async def _checkin_and_notify(self, record: UserRecord) -> SweepOutcome:
        try:
            result = await self.checkin(record)
        except (AuthenticationError, MalformedUpstreamResponse) as e:
            logger.warning(f"[自动打卡] 打卡失败: 会话 {record.chat_id} - {e}")
            await self.notifier.send(record.chat_id, format_error(e))
            return SweepOutcome(chat_id=record.chat_id, success=False, message=str(e))

        await self.notifier.send(record.chat_id, format_checkin_result(result))
        return SweepOutcome(chat_id=record.chat_id, success=result.success, message=result.message)
