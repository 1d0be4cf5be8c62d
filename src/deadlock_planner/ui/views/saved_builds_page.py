"""Saved builds page view."""

from gi.repository import Gtk

from deadlock_planner.ui.controllers.build_controller import BuildController


class SavedBuildsPage(Gtk.Box):
    """List of saved builds with load/compare/delete actions."""

    def __init__(self, controller: BuildController) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        self._controller = controller
        self.set_margin_top(16)
        self.set_margin_bottom(16)
        self.set_margin_start(16)
        self.set_margin_end(16)

        title = Gtk.Label(label="Saved Builds")
        title.add_css_class("title-2")
        title.set_xalign(0)
        self.append(title)

        path = self._controller.state.builds_path
        if path is not None:
            location = Gtk.Label(label=str(path), xalign=0)
            location.add_css_class("dim-label")
            self.append(location)

        scroller = Gtk.ScrolledWindow()
        scroller.set_vexpand(True)
        scroller.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        self.append(scroller)
        self._list = Gtk.ListBox()
        self._list.set_selection_mode(Gtk.SelectionMode.NONE)
        scroller.set_child(self._list)

        import_frame = Gtk.Frame(label="Import / Export JSON")
        self.append(import_frame)
        import_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        import_box.set_margin_top(10)
        import_box.set_margin_bottom(10)
        import_box.set_margin_start(10)
        import_box.set_margin_end(10)
        import_frame.set_child(import_box)
        json_scroll = Gtk.ScrolledWindow()
        json_scroll.set_min_content_height(120)
        import_box.append(json_scroll)
        self._json_view = Gtk.TextView()
        self._json_view.set_monospace(True)
        json_scroll.set_child(self._json_view)
        import_button = Gtk.Button(label="Import")
        import_button.set_halign(Gtk.Align.START)
        import_button.connect("clicked", self._on_import)
        import_box.append(import_button)

        self._status_label = Gtk.Label(xalign=0)
        self._status_label.set_wrap(True)
        self.append(self._status_label)

        self.refresh()

    def refresh(self) -> None:
        child = self._list.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self._list.remove(child)
            child = next_child

        rows = self._controller.saved_build_rows()
        if not rows:
            row = Gtk.ListBoxRow()
            row.set_child(Gtk.Label(label="No saved builds.", xalign=0))
            self._list.append(row)
            return

        for build_id, name, hero_name in rows:
            box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
            label = Gtk.Label(label=f"{name}  [{hero_name}]", xalign=0)
            label.set_hexpand(True)
            box.append(label)
            for text, handler in (
                ("Load", self._on_load),
                ("Compare", self._on_compare),
                ("Export", self._on_export),
                ("Delete", self._on_delete),
            ):
                button = Gtk.Button(label=text)
                button.connect("clicked", handler, build_id)
                box.append(button)
            row = Gtk.ListBoxRow()
            row.set_child(box)
            self._list.append(row)

    def _on_load(self, _button: Gtk.Button, build_id: str) -> None:
        ok, message = self._controller.load_build(build_id)
        self._status_label.set_text(message or ("Loaded." if ok else ""))

    def _on_compare(self, _button: Gtk.Button, build_id: str) -> None:
        _ok, message, _comparison = self._controller.compare_with_saved(build_id)
        self._status_label.set_text(message or "")

    def _on_delete(self, _button: Gtk.Button, build_id: str) -> None:
        ok, message = self._controller.delete_build(build_id)
        if not ok:
            self._status_label.set_text(message or "")

    def _on_export(self, _button: Gtk.Button, build_id: str) -> None:
        text = self._controller.export_build(build_id)
        if text is None:
            self._status_label.set_text("Saved build not found.")
            return
        self._json_view.get_buffer().set_text(text)
        self._status_label.set_text("")

    def _on_import(self, _button: Gtk.Button) -> None:
        buffer = self._json_view.get_buffer()
        text = buffer.get_text(buffer.get_start_iter(), buffer.get_end_iter(), False)
        _ok, message = self._controller.import_build(text)
        self._status_label.set_text(message or "")
