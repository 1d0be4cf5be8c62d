"""Grouped base/current stat grid."""

from gi.repository import Gtk

from deadlock_planner.ui.controllers.build_controller import StatRow, format_number


class StatGrid(Gtk.Box):
    """One frame per stat group; changed values are highlighted."""

    def __init__(self) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=8)

    def set_rows(self, rows: list[StatRow]) -> None:
        child = self.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self.remove(child)
            child = next_child

        if not rows:
            self.append(Gtk.Label(label="Select a hero to see stats.", xalign=0))
            return

        grids: dict[str, Gtk.Grid] = {}
        for row in rows:
            grid = grids.get(row.group)
            if grid is None:
                frame = Gtk.Frame(label=row.group)
                grid = Gtk.Grid(column_spacing=12, row_spacing=4)
                grid.set_margin_top(10)
                grid.set_margin_bottom(10)
                grid.set_margin_start(10)
                grid.set_margin_end(10)
                frame.set_child(grid)
                self.append(frame)
                grids[row.group] = grid
            idx = sum(1 for _ in _children(grid)) // 3
            grid.attach(Gtk.Label(label=row.label, xalign=0, hexpand=True), 0, idx, 1, 1)
            base = Gtk.Label(label=format_number(row.base), xalign=1)
            base.add_css_class("dim-label")
            base.add_css_class("numeric")
            grid.attach(base, 1, idx, 1, 1)
            current = Gtk.Label(label=format_number(row.current), xalign=1)
            current.add_css_class("numeric")
            if row.changed:
                current.add_css_class("accent")
            grid.attach(current, 2, idx, 1, 1)


def _children(widget: Gtk.Widget):
    child = widget.get_first_child()
    while child is not None:
        yield child
        child = child.get_next_sibling()
