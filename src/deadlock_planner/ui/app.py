"""Desktop entry point: parse launch options, load the catalog, open the window."""

from __future__ import annotations

import logging
import sys

try:
    import gi
except ImportError as exc:  # pragma: no cover - import guard for missing system deps
    raise SystemExit(
        "PyGObject is required to run the UI. "
        "Install GTK4/Libadwaita bindings, then run `deadlock-planner`."
    ) from exc

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gio, Gtk

from deadlock_planner.catalog.client import CatalogError
from deadlock_planner.ui.bootstrap import (
    BuildSession,
    LaunchOptions,
    bootstrap_default_session,
    describe_source,
    parse_launch_args,
)
from deadlock_planner.ui.state import UiState
from deadlock_planner.ui.views.window import MainWindow


APP_ID = "io.github.deadlockplanner.App"

logger = logging.getLogger(__name__)


class DeadlockPlannerApp(Adw.Application):
    """Owns the build session; the window is created on first activation."""

    def __init__(self, session: BuildSession, state: UiState) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.NON_UNIQUE)
        self._session = session
        self._state = state

    def do_activate(self) -> None:  # type: ignore[override]
        window = self.props.active_window
        if window is None:
            source = self._state.catalog_source
            if source.error:
                logger.warning("%s", describe_source(source))
            else:
                logger.info("%s", describe_source(source))
            window = MainWindow(self, self._state, self._session)
        window.present()


def _load_session(options: LaunchOptions) -> tuple[BuildSession, UiState]:
    try:
        return bootstrap_default_session(
            snapshot_dir=options.snapshot_dir,
            builds_path=options.builds_path,
        )
    except (CatalogError, FileNotFoundError) as exc:
        raise SystemExit(f"Couldn't load catalog snapshot: {exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Run the desktop app."""
    options = parse_launch_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.INFO if options.verbose else logging.WARNING)

    init_ok = Gtk.init_check()
    if isinstance(init_ok, tuple):
        init_ok = init_ok[0]
    if not init_ok:
        raise SystemExit("Gtk display initialization failed. Run the UI inside a desktop session.")

    session, state = _load_session(options)
    app = DeadlockPlannerApp(session, state)
    try:
        app.run([sys.argv[0]])
    except KeyboardInterrupt:
        return


if __name__ == "__main__":
    main()
