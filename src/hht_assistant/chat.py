"""
Chat client for the search relay.

`ChatSession` owns the conversation log and the busy flag. Views subscribe to
it and re-render whenever it changes; they never modify it directly.
"""
import asyncio
from dataclasses import dataclass, field
from functools import wraps
from logging import getLogger
from typing import Callable, List, Optional, Tuple, Union

import click
import httpx
from dotenv import load_dotenv

from hht_assistant.config import get_relay_url
from hht_assistant.schemas import SearchResponse, VideoResult

load_dotenv()

logger = getLogger(__name__)

APOLOGY = "I couldn’t find suitable videos. Try rephrasing your question."
SUBMIT_LABEL = "Generate"
BUSY_LABEL = "Thinking..."


class RelayError(Exception):
    pass


class RelayClient:
    """Calls the relay's search endpoint."""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def search(self, query: str) -> List[VideoResult]:
        url = f"{self.base_url}/api/search"
        if self._client is not None:
            response = await self._client.get(url, params={"query": query})
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, params={"query": query})

        if response.is_error:
            try:
                message = response.json().get("error")
            except (ValueError, AttributeError):
                message = None
            raise RelayError(message or "Failed to fetch videos")

        return SearchResponse.model_validate(response.json()).videos


@dataclass(frozen=True)
class UserMessage:
    text: str
    role: str = field(default="user", init=False)


@dataclass(frozen=True)
class AssistantMessage:
    text: str
    results: Tuple[VideoResult, ...] = ()
    is_error: bool = False
    role: str = field(default="assistant", init=False)


Message = Union[UserMessage, AssistantMessage]
Observer = Callable[["ChatSession"], None]


class ChatSession:
    def __init__(self, relay: RelayClient, sort_label: str = "sorted by views"):
        self.relay = relay
        self.sort_label = sort_label
        self.input = ""
        self.busy = False
        self._messages: List[Message] = []
        self._observers: List[Observer] = []

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def submit_label(self) -> str:
        return BUSY_LABEL if self.busy else SUBMIT_LABEL

    @property
    def can_submit(self) -> bool:
        return bool(self.input.strip()) and not self.busy

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe():
            self._observers.remove(observer)

        return unsubscribe

    def _notify(self):
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                logger.exception(f"Chat observer {observer!r} failed")

    def set_input(self, text: str):
        self.input = text

    async def handle_key(self, key: str, shift: bool = False):
        if key != "Enter":
            return
        if shift:
            self.input += "\n"
            return
        await self.submit(self.input)

    async def submit(self, text: str):
        query = text.strip()
        if not query or self.busy:
            return

        # Everything up to the relay call happens before the first await so
        # a second submit sees busy=True.
        self._messages.append(UserMessage(query))
        self.input = ""
        self.busy = True

        try:
            self._notify()
            videos = await self.relay.search(query)
            self._messages.append(
                AssistantMessage(
                    text=f'Top videos for "{query}" ({self.sort_label}):',
                    results=tuple(videos),
                )
            )
        except Exception:
            logger.exception(f"Search for '{query}' failed")
            self._messages.append(AssistantMessage(text=APOLOGY, is_error=True))
        finally:
            self.busy = False
            self._notify()


class TerminalView:
    """Prints new messages as they are appended to the session's log."""

    def __init__(self, echo: Callable[[str], None] = click.echo):
        self.echo = echo
        self.rendered = 0
        self.was_busy = False

    def __call__(self, session: ChatSession):
        for message in session.messages[self.rendered:]:
            self.render_message(message)
        self.rendered = len(session.messages)

        if session.busy and not self.was_busy:
            self.echo(session.submit_label)
        self.was_busy = session.busy

    def render_message(self, message: Message):
        if message.role == "user":
            self.echo(f"> {message.text}")
            return

        self.echo("Assistant Response:")
        self.echo(message.text)
        for i, video in enumerate(message.results, start=1):
            self.echo(f"{i}. {video.title}")
            self.echo(f"   {video.embed_url}")
        self.echo("")


def async_command(f):
    """Wrapper necessary because Click doesn't support async"""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@click.command()
@click.option(
    "--relay-url",
    help="Base URL of the search relay (default: $HHT_RELAY_URL or http://localhost:3000)",
    default=get_relay_url,
)
@async_command
async def main(relay_url: str):
    """
    Chat with the HHT Training Assistant from the terminal. Type a question
    and press Enter; type /quit or send EOF to leave.
    """
    stdin = click.get_text_stream("stdin")

    async with create_http_client() as client:
        session = ChatSession(RelayClient(relay_url, client))
        session.subscribe(TerminalView())

        click.echo("Type your question here")
        while True:
            click.echo("> ", nl=False)
            line = await asyncio.to_thread(stdin.readline)
            # readline returns "" only at EOF
            if not line or line.strip() == "/quit":
                break
            session.set_input(line.rstrip("\r\n"))
            await session.handle_key("Enter")


if __name__ == "__main__":
    main()
