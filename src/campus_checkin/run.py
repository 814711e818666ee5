"""Bot 启动入口（日志配置）"""

import logging
import sys
import time
from datetime import datetime

from campus_checkin.config.settings import get_settings
from campus_checkin.core.timezone import get_timezone

RESET = "\033[0m"

# 日志级别颜色映射
LOG_COLORS = {
    logging.DEBUG: "\033[38;5;245m",      # 灰色
    logging.INFO: "\033[38;5;79m",        # 青绿色
    logging.WARNING: "\033[38;5;221m",    # 橙黄
    logging.ERROR: "\033[38;5;203m",      # 红
    logging.CRITICAL: "\033[1;38;5;203m", # 粗体红
}

# 日志级别名称映射（统一宽度）
LOG_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO ",
    logging.WARNING: "WARN ",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRIT ",
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ColorFormatter(logging.Formatter):
    """带颜色和对齐的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        """使用配置时区的时间格式化器"""
        dt = datetime.fromtimestamp(record.created, tz=get_timezone())
        ct = dt.replace(tzinfo=None).timetuple()
        return time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)

    def format(self, record):
        """格式化日志记录，添加颜色"""
        level_color = LOG_COLORS.get(record.levelno, "")
        record.levelname = LOG_LEVEL_NAMES.get(record.levelno, record.levelname)

        result = super().format(record)

        if level_color:
            result = f"{level_color}{result}{RESET}"
        return result


def setup_logging() -> None:
    """按配置初始化日志"""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColorFormatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(level=settings.log_level, handlers=[handler])

    # 隐藏冗余的库日志
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.INFO)
    logging.getLogger("telegram").setLevel(logging.INFO)
    logging.getLogger("telegram.ext").setLevel(logging.INFO)


def main():
    """启动 Bot"""
    setup_logging()

    from campus_checkin.bot.app import create_app, run_app

    logger = logging.getLogger(__name__)
    logger.info("正在启动 Bot...")
    app = create_app()
    run_app(app)


if __name__ == "__main__":
    main()
