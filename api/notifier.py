"""Best-effort match result notifications for the operator."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from config import NotifierConfig, config
from core.scoring import FinalResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchFinished:
    """Emitted once per room when its match ends."""

    room_id: str
    names: dict[str, str | None]
    external_ids: dict[str, str | None]
    result: FinalResult

    def summary(self) -> str:
        """Human-readable one-message summary."""
        lines = [f"Match finished in room {self.room_id}"]
        for slot in ("p1", "p2"):
            score = getattr(self.result, slot)
            name = self.names.get(slot) or slot
            ext = self.external_ids.get(slot)
            who = f"{name} ({ext})" if ext else name
            lines.append(f"{who}: {score.total} pts")
        if self.result.winner == "draw":
            lines.append("Result: draw")
        else:
            lines.append(f"Winner: {self.names.get(self.result.winner) or self.result.winner}")
        return "\n".join(lines)


class MatchNotifier(ABC):
    """Abstract match result sink."""

    @abstractmethod
    async def notify(self, event: MatchFinished) -> None:
        """Deliver a finished-match notification."""
        ...


class NullNotifier(MatchNotifier):
    """Logs results instead of sending them anywhere."""

    async def notify(self, event: MatchFinished) -> None:
        logger.info("Match finished in %s: winner %s", event.room_id, event.result.winner)


class TelegramNotifier(MatchNotifier):
    """Posts match results to an operator chat through the Telegram Bot API."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        api_url: str = "https://api.telegram.org",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = f"{api_url.rstrip('/')}/bot{bot_token}/sendMessage"
        self._chat_id = chat_id
        self._timeout = timeout
        self._client = client

    async def notify(self, event: MatchFinished) -> None:
        """
        Send the summary message.

        Raises:
            httpx.HTTPError: on network failure or a non-2xx response
        """
        payload = {"chat_id": self._chat_id, "text": event.summary()}
        if self._client is not None:
            response = await self._client.post(self._url, json=payload, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=payload)
        response.raise_for_status()


async def deliver(notifier: MatchNotifier, event: MatchFinished) -> bool:
    """
    Hand an event to a notifier, swallowing and logging any failure.

    Returns:
        True if the notifier accepted the event
    """
    try:
        await notifier.notify(event)
    except httpx.HTTPError as exc:
        logger.warning("Match notification for %s failed: %s", event.room_id, exc)
        return False
    except Exception:
        logger.exception("Match notifier crashed for room %s", event.room_id)
        return False
    return True


def build_notifier(settings: NotifierConfig | None = None) -> MatchNotifier:
    """Pick the notifier the configuration asks for."""
    settings = settings or config.notifier
    if settings.enabled:
        return TelegramNotifier(
            bot_token=settings.bot_token,  # type: ignore[arg-type]
            chat_id=settings.operator_chat_id,  # type: ignore[arg-type]
            api_url=settings.api_url,
            timeout=settings.timeout,
        )
    return NullNotifier()
