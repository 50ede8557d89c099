"""Birdie counter TUI application."""

from datetime import datetime
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import BindingType
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from ..api import ScoreFeedAPI
from ..config import DEFAULT_POLL_INTERVAL
from ..engine import PollSession
from ..engine.scheduler import ScoreFetcher
from ..models import EngineState, Error, InputParameters, Loading, Ready
from ..utils.logging import log, set_console_logging

DEFAULT_TITLE = "BALLS FOR BIRDIES"

TILE_IDS = ("birdies", "eagles", "total")
TILE_LABELS = {"birdies": "BIRDIES", "eagles": "EAGLES", "total": "TOTAL DEPLOYED"}


def tile_digits(value: int, width: int = 3) -> str:
    """Zero-padded counter text with a space between digits"""
    return " ".join(str(value).zfill(width))


class ScoreDisplay(App[None]):
    """Live birdie / eagle counter driven by a PollSession"""

    CSS: ClassVar[
        str
    ] = """
    Screen {
        layout: vertical;
        align: center middle;
    }

    Header {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-1;
    }

    #tiles {
        height: auto;
        width: 1fr;
        align: center middle;
    }

    .tile {
        width: 1fr;
        height: auto;
        margin: 0 1;
        border: solid $primary;
    }

    .tile-value {
        text-align: center;
        text-style: bold;
        padding: 1 0;
        background: $surface;
    }

    .tile-label {
        text-align: center;
        background: $primary;
        color: $text;
    }

    #birdies .tile-label {
        color: #ffea00;
    }

    #eagles .tile-label {
        color: #22c56d;
    }

    .error .tile-label {
        background: $error;
        color: $text;
    }

    #status-line {
        height: 1;
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        ("r", "refresh", "Refresh"),
        ("q", "quit", "Quit"),
    ]

    # Reactive variables
    birdies: reactive[int] = reactive(0)
    eagles: reactive[int] = reactive(0)
    total_deployed: reactive[int] = reactive(0)
    engine_status: reactive[str] = reactive("idle")
    last_update: reactive[str] = reactive("")

    def __init__(
        self,
        params: InputParameters | None = None,
        api: ScoreFetcher | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        title: str = DEFAULT_TITLE,
    ):
        super().__init__()
        self.params: InputParameters = params or InputParameters()
        self.api: ScoreFetcher = api or ScoreFeedAPI()
        self.poll_interval: float = poll_interval
        self.session: PollSession | None = None
        self.engine_state: EngineState | None = None
        self.title = title
        log(
            f"🎯 ScoreDisplay initialized with {self.params!r}, "
            f"poll_interval: {poll_interval}"
        )

    def compose(self) -> ComposeResult:
        """Create the UI layout"""
        yield Header()
        with Horizontal(id="tiles"):
            for tile_id in TILE_IDS:
                yield Vertical(
                    Static(tile_digits(0), classes="tile-value"),
                    Static(TILE_LABELS[tile_id], classes="tile-label"),
                    classes="tile",
                    id=tile_id,
                )
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        """Start polling once the widgets exist"""
        set_console_logging(False)
        log("🏁 on_mount() called")
        self.start_session()

    def start_session(self) -> None:
        self.session = PollSession(
            self.params,
            self.api,
            interval=self.poll_interval,
            on_publish=self.show_state,
        ).start()

    def set_parameters(self, params: InputParameters) -> None:
        """Tear down the running session and start one for the new inputs"""
        log(f"🔁 Parameters changed: {params!r}")
        if self.session is not None:
            self.session.stop()
        self.params = params
        self.start_session()

    def show_state(self, state: EngineState) -> None:
        """Render a published engine state"""
        self.engine_state = state
        self.engine_status = state.status

        if isinstance(state, Ready):
            self.birdies = state.score.birdies
            self.eagles = state.score.eagles
            self.total_deployed = state.total_deployed
            self.last_update = datetime.now().strftime("%H:%M:%S")
        else:
            # Anything but Ready shows zeros; Error never keeps a stale count
            self.birdies = 0
            self.eagles = 0
            self.total_deployed = 0
            if isinstance(state, Error):
                self.last_update = f"Error at {datetime.now().strftime('%H:%M:%S')}"

        self.update_tiles()

    def update_tiles(self) -> None:
        values = {
            "birdies": self.birdies,
            "eagles": self.eagles,
            "total": self.total_deployed,
        }
        is_error = isinstance(self.engine_state, Error)
        for tile_id in TILE_IDS:
            tile = self.query_one(f"#{tile_id}", Vertical)
            tile.set_class(is_error, "error")
            tile.query_one(".tile-value", Static).update(tile_digits(values[tile_id]))
            tile.query_one(".tile-label", Static).update(
                "ERROR" if is_error else TILE_LABELS[tile_id]
            )
        self.query_one("#status-line", Static).update(self.status_text)

    @property
    def status_text(self) -> str:
        state = self.engine_state
        if isinstance(state, Loading):
            return "🔄 Fetching scores..."
        if isinstance(state, Error):
            return f"❌ {state.message} ({self.last_update})"
        if isinstance(state, Ready):
            if self.params.has_feed:
                return (
                    f"Event {self.params.event_id} · Round {self.params.round_id}"
                    f" · Updated {self.last_update}"
                )
            return "Manual count"
        return "No event configured"

    def action_refresh(self) -> None:
        """Manually refresh scores"""
        log("🔄 Manual refresh triggered")
        if self.session is not None and self.session.refresh() is not None:
            self.notify("Refreshing scores...")

    def on_unmount(self) -> None:
        """Stop polling when the app goes away"""
        if self.session is not None:
            self.session.stop()
