"""入站消息数据模型"""

from pydantic import BaseModel, ConfigDict

from campus_checkin.models.user_record import Location


class TelegramLocation(BaseModel):
    """Telegram 位置（忽略精度等附加字段）"""

    model_config = ConfigDict(extra="ignore")

    longitude: float
    latitude: float


class TelegramChat(BaseModel):
    """Telegram 会话"""

    model_config = ConfigDict(extra="ignore")

    id: int
    username: str | None = None


class TelegramMessage(BaseModel):
    """Telegram 消息（只保留用到的字段）"""

    model_config = ConfigDict(extra="ignore")

    chat: TelegramChat
    text: str | None = None
    location: TelegramLocation | None = None


class TelegramUpdate(BaseModel):
    """Telegram Update"""

    model_config = ConfigDict(extra="ignore")

    message: TelegramMessage


class InboundMessage(BaseModel):
    """命令解释器的输入：会话 ID 加文本或位置"""

    model_config = ConfigDict(frozen=True)

    chat_id: int
    text: str | None = None
    location: Location | None = None

    @classmethod
    def from_update(cls, update: TelegramUpdate) -> "InboundMessage":
        """从 Telegram Update 构造"""
        message = update.message
        location = None
        if message.location is not None:
            location = Location(
                longitude=message.location.longitude,
                latitude=message.location.latitude,
            )
        return cls(chat_id=message.chat.id, text=message.text, location=location)
