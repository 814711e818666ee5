"""Bot 应用实例"""

import logging

from telegram.ext import Application

from campus_checkin.bot.handlers.message import message_handler
from campus_checkin.config.settings import get_settings
from campus_checkin.core.database import check_and_init_database, close_pool
from campus_checkin.services.commands import CommandService
from campus_checkin.services.notification import NotificationService
from campus_checkin.tasks.scheduler import register_jobs

logger = logging.getLogger(__name__)


def create_app() -> Application:
    """创建 Bot 应用实例"""
    settings = get_settings()

    app = Application.builder().token(settings.bot_token).build()

    app.bot_data["command_service"] = CommandService(NotificationService(app.bot))

    app.add_handler(message_handler)

    app.add_error_handler(error_handler)

    # post_init 回调：在应用初始化后建表并注册定时任务
    async def post_init(application: Application) -> None:
        await check_and_init_database()
        await register_jobs(application)

    async def post_shutdown(application: Application) -> None:
        await close_pool()

    app.post_init = post_init
    app.post_shutdown = post_shutdown

    logger.info("Bot 应用创建成功")

    return app


def run_app(app: Application) -> None:
    """按配置以 Webhook 或轮询模式运行"""
    settings = get_settings()

    if settings.use_webhook:
        logger.info(f"以 Webhook 模式运行: {settings.webhook_url}")
        app.run_webhook(
            listen=settings.webhook_listen,
            port=settings.webhook_port,
            webhook_url=settings.webhook_url,
            secret_token=settings.webhook_secret or None,
        )
    else:
        logger.info("以轮询模式运行")
        app.run_polling()


async def error_handler(update: object, context) -> None:
    """错误处理器"""
    logger.error(f"处理更新时发生异常: {context.error}", exc_info=context.error)
