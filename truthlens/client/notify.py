from truthlens.config import logger


class Notifier:
    """Transient user-facing notifications (toasts)."""

    def success(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError

    def info(self, message: str) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):

    def success(self, message: str) -> None:
        logger.info("[success] %s", message)

    def error(self, message: str) -> None:
        logger.error("[error] %s", message)

    def info(self, message: str) -> None:
        logger.info("[info] %s", message)
