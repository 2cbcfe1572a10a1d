"""Bot handlers."""

from aiogram import Dispatcher

from imagebot.handlers import (
    echo,
    errors,
    image_settings,
    profile,
    prompt,
    settings,
    start,
    text,
)


def register_all_handlers(dp: Dispatcher) -> None:
    """
    Include all routers.

    The prompt router must come before the text router: it takes free text
    from users awaiting a prompt and skips everything else.
    """
    dp.errors.register(errors.global_error_handler)

    dp.include_routers(
        start.router,
        profile.router,
        settings.router,
        image_settings.router,
        echo.router,
        prompt.router,
        text.router,
    )
