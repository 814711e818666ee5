"""定时打卡任务"""

import logging

from telegram.ext import Application

from campus_checkin.config.settings import get_settings
from campus_checkin.core.timezone import now
from campus_checkin.services.checkin import CheckinService
from campus_checkin.utils.time_slot import seconds_until_next_sweep

logger = logging.getLogger(__name__)


def register_checkin_job(app: Application, checkin_service: CheckinService):
    """
    注册定时巡检任务

    巡检时刻对齐到 sweep_offset_minutes，每 sweep_interval_minutes 执行一次。

    Args:
        app: Bot 应用实例
        checkin_service: 打卡服务
    """
    settings = get_settings()

    async def checkin_job_callback(context):
        """巡检任务回调"""
        try:
            outcomes = await checkin_service.scheduled_checkin()

            if outcomes:
                logger.info(f"完成了 {len(outcomes)} 个定时打卡")

        except Exception as e:
            logger.error(f"打卡任务错误: {e}", exc_info=True)

    first = seconds_until_next_sweep(
        now(),
        settings.sweep_interval_minutes,
        settings.sweep_offset_minutes,
    )
    app.job_queue.run_repeating(
        checkin_job_callback,
        interval=settings.sweep_interval_minutes * 60,
        first=first,
        name="scheduled_checkin",
    )

    logger.info(f"打卡任务已注册: 每 {settings.sweep_interval_minutes} 分钟，{int(first)} 秒后首次执行")
