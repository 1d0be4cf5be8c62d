"""Build page view."""

from gi.repository import Gtk

from deadlock_planner.models.constants import SLOT_TYPES
from deadlock_planner.ui.controllers.build_controller import BuildController
from deadlock_planner.ui.widgets.item_row import ShopItemRow
from deadlock_planner.ui.widgets.stat_grid import StatGrid


def _framed(label: str, child: Gtk.Widget) -> Gtk.Frame:
    frame = Gtk.Frame(label=label)
    child.set_margin_top(10)
    child.set_margin_bottom(10)
    child.set_margin_start(10)
    child.set_margin_end(10)
    frame.set_child(child)
    return frame


def _clear(list_box: Gtk.ListBox) -> None:
    child = list_box.get_first_child()
    while child is not None:
        next_child = child.get_next_sibling()
        list_box.remove(child)
        child = next_child


def _placeholder_row(text: str) -> Gtk.ListBoxRow:
    row = Gtk.ListBoxRow()
    row.set_child(Gtk.Label(label=text, xalign=0, wrap=True))
    return row


class BuildPage(Gtk.Box):
    """Hero, shop, current build and computed metrics."""

    def __init__(self, controller: BuildController) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        self._controller = controller
        self._updating = False
        self.set_hexpand(True)
        self.set_vexpand(True)
        self.set_margin_top(16)
        self.set_margin_bottom(16)
        self.set_margin_start(16)
        self.set_margin_end(16)

        top = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        self.append(top)

        top.append(Gtk.Label(label="Hero", xalign=0))
        self._hero_combo = Gtk.ComboBoxText()
        for hero_id, name in self._controller.hero_options():
            self._hero_combo.append(str(hero_id), name)
        if self._controller.selected_hero_id is not None:
            self._hero_combo.set_active_id(str(self._controller.selected_hero_id))
        self._hero_combo.connect("changed", self._on_hero_changed)
        top.append(self._hero_combo)

        self._hero_label = Gtk.Label(xalign=0)
        self._hero_label.add_css_class("dim-label")
        self._hero_label.set_hexpand(True)
        top.append(self._hero_label)

        self._name_entry = Gtk.Entry()
        self._name_entry.set_placeholder_text("Build name")
        top.append(self._name_entry)
        save = Gtk.Button(label="Save")
        save.add_css_class("suggested-action")
        save.connect("clicked", self._on_save)
        top.append(save)

        pane = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        pane.set_wide_handle(True)
        pane.set_hexpand(True)
        pane.set_vexpand(True)
        pane.set_shrink_start_child(False)
        pane.set_shrink_end_child(False)
        self.append(pane)

        # Shop
        shop = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        shop.set_size_request(380, -1)
        pane.set_start_child(_framed("Shop", shop))

        filters = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        shop.append(filters)
        self._search = Gtk.SearchEntry()
        self._search.set_hexpand(True)
        self._search.connect("search-changed", self._on_filter_changed)
        filters.append(self._search)
        self._slot_combo = Gtk.ComboBoxText()
        self._slot_combo.append("", "All")
        for slot in SLOT_TYPES:
            self._slot_combo.append(slot, slot.title())
        self._slot_combo.set_active_id("")
        self._slot_combo.connect("changed", self._on_filter_changed)
        filters.append(self._slot_combo)

        shop_scroll = Gtk.ScrolledWindow()
        shop_scroll.set_vexpand(True)
        shop_scroll.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        shop.append(shop_scroll)
        self._shop_list = Gtk.ListBox()
        self._shop_list.set_selection_mode(Gtk.SelectionMode.NONE)
        shop_scroll.set_child(self._shop_list)

        right_scroll = Gtk.ScrolledWindow()
        right_scroll.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        pane.set_end_child(right_scroll)
        right = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=12)
        right_scroll.set_child(right)

        build_col = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        build_col.set_hexpand(True)
        right.append(build_col)

        # Current build
        build_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        build_col.append(_framed("Build", build_box))
        self._capacity_label = Gtk.Label(xalign=0)
        build_box.append(self._capacity_label)
        self._build_list = Gtk.ListBox()
        self._build_list.set_selection_mode(Gtk.SelectionMode.NONE)
        build_box.append(self._build_list)
        clear = Gtk.Button(label="Clear Items")
        clear.set_halign(Gtk.Align.START)
        clear.connect("clicked", self._on_clear)
        build_box.append(clear)

        # Optimizer
        opt_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        build_col.append(_framed("Suggest Items", opt_box))
        opt_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        opt_box.append(opt_row)
        config = self._controller.engine.config
        opt_row.append(Gtk.Label(label="Budget", xalign=0))
        self._budget_spin = Gtk.SpinButton.new_with_range(0, 100_000, 500)
        self._budget_spin.set_value(config.default_budget)
        opt_row.append(self._budget_spin)
        opt_row.append(Gtk.Label(label="Slots", xalign=0))
        self._slots_spin = Gtk.SpinButton.new_with_range(1, self._controller.engine.max_items, 1)
        self._slots_spin.set_value(config.optimizer_slots)
        opt_row.append(self._slots_spin)
        suggest = Gtk.Button(label="Suggest")
        suggest.connect("clicked", self._on_suggest)
        opt_row.append(suggest)
        self._suggest_label = Gtk.Label(xalign=0)
        self._suggest_label.set_wrap(True)
        opt_box.append(self._suggest_label)

        # Share
        share_box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        build_col.append(_framed("Share", share_box))
        self._share_entry = Gtk.Entry()
        self._share_entry.set_hexpand(True)
        self._share_entry.set_placeholder_text("Build code")
        share_box.append(self._share_entry)
        copy_code = Gtk.Button(label="Get Code")
        copy_code.connect("clicked", self._on_get_code)
        share_box.append(copy_code)
        load_code = Gtk.Button(label="Load Code")
        load_code.connect("clicked", self._on_load_code)
        share_box.append(load_code)

        self._status_label = Gtk.Label(xalign=0)
        self._status_label.set_wrap(True)
        build_col.append(self._status_label)

        # Metrics
        metrics_col = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        metrics_col.set_hexpand(True)
        right.append(metrics_col)

        self._dps_grid = Gtk.Grid(column_spacing=12, row_spacing=4)
        metrics_col.append(_framed("Weapon DPS", self._dps_grid))
        self._dps_values: list[Gtk.Label] = []
        for idx, (label, _value) in enumerate(self._controller.dps_rows()):
            self._dps_grid.attach(Gtk.Label(label=label, xalign=0, hexpand=True), 0, idx, 1, 1)
            value = Gtk.Label(xalign=1)
            value.add_css_class("numeric")
            self._dps_grid.attach(value, 1, idx, 1, 1)
            self._dps_values.append(value)

        self._abilities_list = Gtk.ListBox()
        self._abilities_list.set_selection_mode(Gtk.SelectionMode.NONE)
        metrics_col.append(_framed("Abilities", self._abilities_list))

        self._stat_grid = StatGrid()
        metrics_col.append(self._stat_grid)

        self.refresh()

    def refresh(self) -> None:
        self._updating = True
        try:
            hero_id = self._controller.selected_hero_id
            if hero_id is not None and self._hero_combo.get_active_id() != str(hero_id):
                self._hero_combo.set_active_id(str(hero_id))
            self._hero_label.set_text(self._controller.hero_summary())
            self._name_entry.set_text(self._controller.state.build_name)
            self._capacity_label.set_text(
                f"{self._controller.capacity_label()}  -  {self._controller.total_cost()} souls"
            )
            self._render_shop()
            self._render_build()
            for label, (_name, value) in zip(self._dps_values, self._controller.dps_rows()):
                label.set_text(value)
            self._render_abilities()
            self._stat_grid.set_rows(self._controller.stat_rows())
        finally:
            self._updating = False

    def _render_shop(self) -> None:
        _clear(self._shop_list)
        rows = self._controller.item_rows(
            query=self._search.get_text(),
            slot_type=self._slot_combo.get_active_id() or None,
        )
        if not rows:
            self._shop_list.append(_placeholder_row("No items match."))
            return
        for row in rows:
            widget = ShopItemRow(
                row,
                efficiency=0.0 if row.in_build else self._controller.item_efficiency(row.item_id),
                tooltip=self._controller.item_tooltip(row.item_id),
                on_add=self._on_add_item,
            )
            list_row = Gtk.ListBoxRow()
            list_row.set_child(widget)
            self._shop_list.append(list_row)

    def _render_build(self) -> None:
        _clear(self._build_list)
        rows = self._controller.selected_item_rows()
        if not rows:
            self._build_list.append(_placeholder_row("No items yet. Add some from the shop."))
            return
        last = len(rows) - 1
        for position, item_id, name, cost in rows:
            box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
            label = Gtk.Label(label=f"{position + 1}. {name}", xalign=0)
            label.set_hexpand(True)
            box.append(label)
            cost_label = Gtk.Label(label=str(cost), xalign=1)
            cost_label.add_css_class("numeric")
            box.append(cost_label)
            up = Gtk.Button(label="Up")
            up.set_sensitive(position > 0)
            up.connect("clicked", self._on_move_item, position, position - 1)
            box.append(up)
            down = Gtk.Button(label="Down")
            down.set_sensitive(position < last)
            down.connect("clicked", self._on_move_item, position, position + 1)
            box.append(down)
            remove = Gtk.Button(label="Remove")
            remove.connect("clicked", self._on_remove_item, item_id)
            box.append(remove)
            row = Gtk.ListBoxRow()
            row.set_child(box)
            row.set_tooltip_text("\n".join(self._controller.item_tooltip(item_id)))
            self._build_list.append(row)

    def _render_abilities(self) -> None:
        _clear(self._abilities_list)
        rows = self._controller.ability_rows()
        if not rows:
            self._abilities_list.append(_placeholder_row("No ability data."))
            return
        for ability in rows:
            parts = [f"Damage {ability.damage}", f"CD {ability.cooldown}"]
            if ability.duration != "-":
                parts.append(f"Duration {ability.duration}")
            if ability.cast_range:
                parts.append(f"Range {ability.cast_range}")
            if ability.charges > 1:
                parts.append(f"{ability.charges} charges")
            if ability.dps > 0:
                parts.append(f"{ability.dps:g} DPS")
            box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
            name = Gtk.Label(label=ability.name, xalign=0)
            name.add_css_class("heading")
            box.append(name)
            box.append(Gtk.Label(label="  |  ".join(parts), xalign=0, wrap=True))
            row = Gtk.ListBoxRow()
            row.set_child(box)
            self._abilities_list.append(row)

    def _show_result(self, ok: bool, message: str | None) -> None:
        if ok:
            self._status_label.remove_css_class("error")
        else:
            self._status_label.add_css_class("error")
        self._status_label.set_text(message or "")

    def _on_hero_changed(self, combo: Gtk.ComboBoxText) -> None:
        if self._updating:
            return
        hero_id = combo.get_active_id()
        if hero_id is None:
            return
        self._show_result(*self._controller.select_hero(int(hero_id)))

    def _on_filter_changed(self, _widget: Gtk.Widget) -> None:
        if self._updating:
            return
        self._render_shop()

    def _on_add_item(self, item_id: int) -> None:
        self._show_result(*self._controller.add_item(item_id))

    def _on_remove_item(self, _button: Gtk.Button, item_id: int) -> None:
        self._show_result(*self._controller.remove_item(item_id))

    def _on_move_item(self, _button: Gtk.Button, from_index: int, to_index: int) -> None:
        self._show_result(*self._controller.move_item(from_index, to_index))

    def _on_clear(self, _button: Gtk.Button) -> None:
        self._controller.clear_items()
        self._show_result(True, None)

    def _on_save(self, _button: Gtk.Button) -> None:
        self._show_result(*self._controller.save_build(self._name_entry.get_text()))

    def _on_suggest(self, _button: Gtk.Button) -> None:
        result = self._controller.suggest_items(
            budget=int(self._budget_spin.get_value()),
            max_slots=int(self._slots_spin.get_value()),
        )
        if not result.chosen:
            self._suggest_label.set_text(" ".join(result.messages))
            return
        ok, message = self._controller.apply_suggestion(result)
        names = ", ".join(item.name for item in result.chosen)
        self._suggest_label.set_text(f"{names}\n{' '.join(result.messages)}")
        self._show_result(ok, message)

    def _on_get_code(self, _button: Gtk.Button) -> None:
        code = self._controller.share_code()
        if code is None:
            self._show_result(False, "Select a hero first.")
            return
        self._share_entry.set_text(code)
        self.get_clipboard().set(code)
        self._show_result(True, "Build code copied to clipboard.")

    def _on_load_code(self, _button: Gtk.Button) -> None:
        self._show_result(*self._controller.load_share_code(self._share_entry.get_text()))
