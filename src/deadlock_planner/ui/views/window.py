"""Main application window."""

from gi.repository import Adw, Gtk

from deadlock_planner.ui.bootstrap import BuildSession
from deadlock_planner.ui.controllers.build_controller import BuildController
from deadlock_planner.ui.state import UiState
from deadlock_planner.ui.views.build_page import BuildPage
from deadlock_planner.ui.views.saved_builds_page import SavedBuildsPage


class MainWindow(Adw.ApplicationWindow):
    """Top-level window with tabbed navigation."""

    def __init__(self, app: Adw.Application, state: UiState, session: BuildSession) -> None:
        super().__init__(application=app, title=state.banner_title)
        self._state = state
        self._session = session

        self._controller = BuildController(
            engine=session.engine,
            storage=session.storage,
            state=state,
        )

        self.set_default_size(1440, 900)
        self.set_size_request(1100, 700)

        toolbar_view = Adw.ToolbarView()
        self.set_content(toolbar_view)

        header = Adw.HeaderBar()
        toolbar_view.add_top_bar(header)

        self._title_label = Gtk.Label()
        self._title_label.add_css_class("title-4")
        header.set_title_widget(self._title_label)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=0)
        content.set_hexpand(True)
        content.set_vexpand(True)
        toolbar_view.set_content(content)

        source = state.catalog_source
        if source.error:
            banner = Adw.Banner(title=f"Catalog unavailable: {source.error}")
            banner.set_revealed(True)
            content.append(banner)

        tab_view = Adw.TabView()
        tab_view.set_hexpand(True)
        tab_view.set_vexpand(True)
        tab_bar = Adw.TabBar.new()
        tab_bar.set_view(tab_view)
        tab_bar.set_autohide(False)
        content.append(tab_bar)
        content.append(tab_view)

        self._build_page = BuildPage(self._controller)
        self._saved_page = SavedBuildsPage(self._controller)
        self._controller.on_change = self._on_build_changed

        self._add_page(tab_view, "Build", self._build_page)
        self._add_page(tab_view, "Saved Builds", self._saved_page)
        self._sync_title()

    def _sync_title(self) -> None:
        hero = self._state.hero_name or "No hero"
        self._title_label.set_label(
            f"{self._state.build_name}  -  {hero}  -  {self._state.total_cost} souls"
        )

    def _add_page(self, tab_view: Adw.TabView, title: str, child: Gtk.Widget) -> None:
        page = tab_view.append(child)
        page.set_title(title)

    def _on_build_changed(self) -> None:
        self._sync_title()
        self._build_page.refresh()
        self._saved_page.refresh()
