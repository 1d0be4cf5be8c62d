"""Shop item row widget."""

from collections.abc import Callable

from gi.repository import Gtk

from deadlock_planner.ui.controllers.build_controller import ItemRow


class ShopItemRow(Gtk.Box):
    """Name, tier/cost, efficiency and an add button for one shop item."""

    def __init__(
        self,
        row: ItemRow,
        efficiency: float,
        tooltip: list[str],
        on_add: Callable[[int], None],
    ) -> None:
        super().__init__(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        name = Gtk.Label(label=row.name, xalign=0)
        name.set_hexpand(True)
        if row.in_build:
            name.add_css_class("dim-label")
        self.append(name)

        meta = Gtk.Label(label=f"T{row.tier}  {row.cost}", xalign=1)
        meta.add_css_class("numeric")
        self.append(meta)

        eff = Gtk.Label(label=f"{efficiency:.2f}/100" if efficiency > 0 else "-", xalign=1)
        eff.set_width_chars(9)
        eff.add_css_class("numeric")
        self.append(eff)

        add = Gtk.Button(label="+")
        add.set_sensitive(not row.in_build)
        add.connect("clicked", lambda _b: on_add(row.item_id))
        self.append(add)

        if tooltip:
            self.set_tooltip_text("\n".join(tooltip))
