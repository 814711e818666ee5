"""命令解释服务"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from campus_checkin.config.constants import HELP_TEXT
from campus_checkin.core.errors import CheckinBotError, UnrecognizedCommand
from campus_checkin.core.timezone import now
from campus_checkin.models.inbound import InboundMessage
from campus_checkin.repositories.user_repository import UserRepository
from campus_checkin.services.checkin import CheckinService
from campus_checkin.services.geocoding import GeocodingService
from campus_checkin.services.notification import NotificationService
from campus_checkin.services.portal import PortalService
from campus_checkin.services.record_updates import (
    new_record,
    with_address,
    with_campus,
    with_checkin_time,
    with_skip_added,
    with_skip_removed,
)
from campus_checkin.utils.formatter import format_checkin_result, format_current_time, format_error, format_record
from campus_checkin.utils.validator import parse_checkin_time, split_args

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "🗑️ 已删除保存的信息"


@dataclass(frozen=True)
class Route:
    """命令路由：文本以 prefix 开头时交给 handler（CommandService 的方法名）"""

    prefix: str
    handler: str


# 按顺序匹配，先匹配者胜出；较长的前缀必须排在与之重叠的较短前缀之前
COMMAND_ROUTES: tuple[Route, ...] = (
    Route("/start", "_start"),
    Route("/login", "_login"),
    Route("/checkin_at", "_checkin_at"),
    Route("/checkin", "_checkin"),
    Route("/info", "_info"),
    Route("/skip", "_skip"),
    Route("/no_skip", "_no_skip"),
    Route("/delete", "_delete"),
    Route("/in_campus", "_in_campus"),
    Route("/out_of_campus", "_out_of_campus"),
    Route("/schedule", "_schedule"),
)


def resolve_route(text: str) -> Route | None:
    """返回第一个匹配的路由，没有则返回 None"""
    for route in COMMAND_ROUTES:
        if text.startswith(route.prefix):
            return route
    return None


class CommandService:
    """命令解释服务（每条消息独立处理，状态全部在存储中）"""

    def __init__(
        self,
        notifier: NotificationService,
        user_repo: UserRepository | None = None,
        portal: PortalService | None = None,
        geocoder: GeocodingService | None = None,
        checkin_service: CheckinService | None = None,
    ):
        self.notifier = notifier
        self.user_repo = user_repo if user_repo is not None else UserRepository()
        self.portal = portal if portal is not None else PortalService()
        self.geocoder = geocoder if geocoder is not None else GeocodingService()
        if checkin_service is None:
            checkin_service = CheckinService(
                notifier,
                user_repo=self.user_repo,
                portal=self.portal,
                geocoder=self.geocoder,
            )
        self.checkin_service = checkin_service

    async def handle(self, message: InboundMessage) -> bool:
        """
        处理一条入站消息

        业务异常在这里转换为一条发给该会话的通知。

        Args:
            message: 入站消息

        Returns:
            是否处理成功
        """
        try:
            await self._dispatch(message)
        except CheckinBotError as e:
            logger.warning(f"命令处理失败: 会话 {message.chat_id} [{e.kind.value}] {e}")
            await self.notifier.send(message.chat_id, format_error(e))
            return False
        return True

    async def _dispatch(self, message: InboundMessage) -> None:
        if message.text is not None:
            text = message.text.strip()
            route = resolve_route(text)
            if route is None:
                raise UnrecognizedCommand(text)
            logger.info(f"会话 {message.chat_id} 执行命令 {route.prefix}")
            handler: Callable[[int, str], Awaitable[None]] = getattr(self, route.handler)
            await handler(message.chat_id, text)
        elif message.location is not None:
            logger.info(f"会话 {message.chat_id} 更新位置")
            await self._update_location(message)
        else:
            logger.debug(f"忽略既无文本也无位置的消息: 会话 {message.chat_id}")

    async def _reply_record(self, chat_id: int) -> None:
        record = await self.user_repo.get(chat_id)
        await self.notifier.send(chat_id, format_record(record), markdown=True)

    # ==================== 命令处理 ====================

    async def _start(self, chat_id: int, text: str) -> None:
        await self.notifier.send(chat_id, HELP_TEXT)

    async def _login(self, chat_id: int, text: str) -> None:
        username, password = split_args(text, 2, redact=True)
        # 认证失败时抛出 AuthenticationError，不写入记录
        await self.portal.authenticate(username, password)
        await self.user_repo.put(chat_id, new_record(chat_id, username, password))
        logger.info(f"会话 {chat_id} 登录成功: {username}")
        await self._reply_record(chat_id)

    async def _checkin_at(self, chat_id: int, text: str) -> None:
        (value,) = split_args(text, 1)
        hour, minute = parse_checkin_time(value)
        record = await self.user_repo.get(chat_id)
        await self.user_repo.put(chat_id, with_checkin_time(record, hour, minute))
        await self._reply_record(chat_id)

    async def _checkin(self, chat_id: int, text: str) -> None:
        record = await self.user_repo.get(chat_id)
        result = await self.checkin_service.checkin(record)
        await self.notifier.send(chat_id, format_checkin_result(result))

    async def _info(self, chat_id: int, text: str) -> None:
        await self.notifier.send(chat_id, format_current_time(now()))
        await self._reply_record(chat_id)

    async def _skip(self, chat_id: int, text: str) -> None:
        record = await self.user_repo.get(chat_id)
        await self.user_repo.put(chat_id, with_skip_added(record))
        await self._reply_record(chat_id)

    async def _no_skip(self, chat_id: int, text: str) -> None:
        record = await self.user_repo.get(chat_id)
        await self.user_repo.put(chat_id, with_skip_removed(record))
        await self._reply_record(chat_id)

    async def _delete(self, chat_id: int, text: str) -> None:
        await self.user_repo.delete(chat_id)
        logger.info(f"会话 {chat_id} 删除了保存的信息")
        await self.notifier.send(chat_id, DELETED_MESSAGE)

    async def _in_campus(self, chat_id: int, text: str) -> None:
        await self._set_campus(chat_id, True)

    async def _out_of_campus(self, chat_id: int, text: str) -> None:
        await self._set_campus(chat_id, False)

    async def _set_campus(self, chat_id: int, in_campus: bool) -> None:
        record = await self.user_repo.get(chat_id)
        await self.user_repo.put(chat_id, with_campus(record, in_campus))
        await self._reply_record(chat_id)

    async def _schedule(self, chat_id: int, text: str) -> None:
        await self.checkin_service.scheduled_checkin()

    async def _update_location(self, message: InboundMessage) -> None:
        record = await self.user_repo.get(message.chat_id)
        address = await self.geocoder.reverse(message.location)
        await self.user_repo.put(message.chat_id, with_address(record, address, message.location))
        await self._reply_record(message.chat_id)
