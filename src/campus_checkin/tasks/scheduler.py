"""任务调度器"""

import logging

from telegram.ext import Application

from campus_checkin.tasks.checkin_job import register_checkin_job

logger = logging.getLogger(__name__)


async def register_jobs(app: Application):
    """
    注册所有定时任务

    Args:
        app: Bot 应用实例
    """
    command_service = app.bot_data["command_service"]
    register_checkin_job(app, command_service.checkin_service)

    logger.info("所有定时任务已注册")
