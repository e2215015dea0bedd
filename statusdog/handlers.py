# statusdog/handlers.py
# DESIGNER'S NOTE:
# This file is the "controller" layer. Every Gradio callback lives on AppHandlers, which receives the
# shared AppContext at construction time (bound methods keep Gradio's SelectData injection working).
#
# Navigation goes through a single hidden route textbox: handlers return a Route value for it and
# `navigate` turns that value into column visibility. Any protected call that fails with AuthError
# logs the user out and returns Route.LOGIN there.
#
# Mutations are tagged in state.py: the temporary list changes locally at once, saved lists only
# change after the backend confirmed the call.
#
# View state (filtered codes, viewed list id, selected item index) belongs to each browser session.
# It lives in gr.State components and travels through the callbacks as inputs and outputs; nothing
# on this class is per-view.

from __future__ import annotations

import datetime
import logging

import gradio as gr
import pandas as pd

from .catalog import HTTP_CODES, describe, filter_codes
from .context import AppContext
from .errors import AuthError, TransportError, ValidationError
from .session import Route

logger = logging.getLogger(__name__)

LIST_COLUMNS = ["ID", "Name", "Created on", "Codes"]


def _now() -> str:
    return datetime.datetime.now().strftime('%H:%M:%S')


def _unchanged(count: int) -> tuple:
    return tuple(gr.update() for _ in range(count))


class AppHandlers:
    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    # --- Navigation ---

    def initial_route(self):
        return self.ctx.session.home_route().value

    def navigate(self, route_value: str):
        """Maps a route to the visibility of the login, sign-up and dashboard columns."""
        try:
            route = Route(route_value)
        except ValueError:
            route = self.ctx.session.home_route()
        if route is Route.DASHBOARD and not self.ctx.session.is_authenticated:
            route = Route.LOGIN
        return (
            gr.update(visible=route is Route.LOGIN),
            gr.update(visible=route is Route.REGISTER),
            gr.update(visible=route is Route.DASHBOARD),
        )

    def go_to_register(self):
        return Route.REGISTER.value

    def go_to_login(self):
        return Route.LOGIN.value

    def _logout(self) -> str:
        self.ctx.saved_lists.clear()
        return self.ctx.session.logout().value

    def _handle_auth_error(self, e: AuthError) -> str:
        logger.warning(f"Protected call rejected, returning to login: {e}")
        gr.Warning("Your session is no longer valid. Please log in again.")
        return self._logout()

    # --- Login / SignUp ---

    def check_backend_status(self):
        return self.ctx.auth_client.check_backend()

    def handle_login(self, email, password):
        """Returns (route, status message, password box)."""
        try:
            route = self.ctx.session.login(email, password)
        except ValidationError as e:
            gr.Warning(str(e))
            return gr.update(), f"⚠️ {e}", gr.update()
        except TransportError as e:
            gr.Warning(f"Login failed: {e}")
            return gr.update(), f"🔴 Login failed: {e}", gr.update(value="")
        gr.Info("Logged in.")
        return route.value, "", gr.update(value="")

    def handle_register(self, name, email, password):
        """Returns (route, status message on the sign-up screen, status message on the login screen)."""
        try:
            route = self.ctx.session.register(name, email, password)
        except ValidationError as e:
            gr.Warning(str(e))
            return gr.update(), f"⚠️ {e}", gr.update()
        except TransportError as e:
            gr.Warning(f"Registration failed: {e}")
            return gr.update(), f"🔴 Registration failed: {e}", gr.update()
        gr.Info("Account created, you can log in now.")
        return route.value, "", "✅ Account created, please log in."

    def handle_logout(self):
        """Returns (route, viewed list id, selected item index)."""
        return self._logout(), None, None

    # --- Search screen ---

    def _gallery(self, codes, alternates=None):
        alternates = alternates or [None] * len(codes)
        return [
            (self.ctx.images.resolve(code, alt), f"{code} · {describe(code)}")
            for code, alt in zip(codes, alternates)
        ]

    def render_temp_list(self):
        codes = self.ctx.temp_list.codes
        count = f"**{len(codes)}** code(s) in the temporary list." if codes else "No items added yet."
        return self._gallery(codes), count

    def apply_filter(self, pattern, filtered):
        """Returns (results gallery, status message, filtered codes)."""
        pattern = pattern or ""
        try:
            codes = filter_codes(pattern)
        except ValidationError as e:
            gr.Warning(str(e))
            return gr.update(), f"⚠️ {e}", filtered
        if not codes:
            return [], "No matching codes available.", codes
        return self._gallery(codes), f"{len(codes)} of {len(HTTP_CODES)} codes match '{pattern}'.", codes

    def add_all(self, filtered):
        filtered = filtered or []
        added = self.ctx.temp_list.add_all(filtered)
        if not filtered:
            gr.Warning("Filter the catalog first, then add the results.")
        return (*self.render_temp_list(), f"Added {added} code(s).")

    def add_from_results(self, filtered, evt: gr.SelectData):
        filtered = filtered or []
        if evt.index is None or not 0 <= evt.index < len(filtered):
            return (*self.render_temp_list(), gr.update())
        code = filtered[evt.index]
        added = self.ctx.temp_list.add(code)
        return (*self.render_temp_list(), f"Added {code}." if added else f"{code} is already in the list.")

    def remove_from_temp(self, evt: gr.SelectData):
        codes = self.ctx.temp_list.codes
        if evt.index is None or not 0 <= evt.index < len(codes):
            return (*self.render_temp_list(), gr.update())
        code = codes[evt.index]
        self.ctx.temp_list.remove(code)
        return (*self.render_temp_list(), f"Removed {code}.")

    def ask_confirm_remove_all(self):
        """Hides the default buttons and shows the yes/no row."""
        if not len(self.ctx.temp_list):
            gr.Warning("The temporary list is already empty.")
            return gr.update(), gr.update()
        return gr.update(visible=False), gr.update(visible=True)

    def _remove_all(self, confirmed: bool):
        cleared = self.ctx.temp_list.remove_all(lambda: confirmed)
        message = "Temporary list cleared." if cleared else "Nothing was removed."
        return (*self.render_temp_list(), message, gr.update(visible=True), gr.update(visible=False))

    def confirm_remove_all(self):
        return self._remove_all(True)

    def cancel_remove_all(self):
        return self._remove_all(False)

    def save_list(self, name):
        """Returns (temp gallery, temp count, name box, status message, route)."""
        codes = self.ctx.temp_list.codes
        if not codes:
            gr.Warning("Add some codes before saving.")
            return (*self.render_temp_list(), gr.update(), "⚠️ The temporary list is empty.", gr.update())
        try:
            self.ctx.lists_client.save_list(name, codes)
        except ValidationError as e:
            gr.Warning(str(e))
            return (*self.render_temp_list(), gr.update(), f"⚠️ {e}", gr.update())
        except AuthError as e:
            return (*self.render_temp_list(), gr.update(), f"🔴 {e}", self._handle_auth_error(e))
        except TransportError as e:
            gr.Warning(f"Error saving list: {e}")
            return (*self.render_temp_list(), gr.update(), f"🔴 Error saving list: {e}", gr.update())

        self.ctx.temp_list.clear()
        gr.Info(f"List '{name.strip()}' saved.")
        return (*self.render_temp_list(), gr.update(value=""), f"✅ List '{name.strip()}' saved.", gr.update())

    # --- List screen ---

    def _lists_frame(self):
        rows = [
            {"ID": saved.id, "Name": saved.name, "Created on": saved.created_on, "Codes": len(saved.codes)}
            for saved in self.ctx.saved_lists.lists
        ]
        return pd.DataFrame(rows, columns=LIST_COLUMNS)

    def _viewing(self, viewing_id):
        viewing = self.ctx.saved_lists.get(viewing_id) if viewing_id else None
        if viewing is None:
            return "Select a list to see its images.", []
        if not viewing.codes:
            return f"## {viewing.name} - no items in this list.", []
        alternates = [viewing.alternate_link(i) for i in range(len(viewing.codes))]
        return f"## {viewing.name} - Images", self._gallery(viewing.codes, alternates)

    def render_lists(self, viewing_id=None, message=None):
        """Returns (dataframe, status, viewing title, viewing gallery)."""
        if message is None:
            count = len(self.ctx.saved_lists.lists)
            message = f"{count} saved list(s)." if count else "No lists saved yet."
        return (self._lists_frame(), message, *self._viewing(viewing_id))

    def refresh_lists(self, viewing_id=None):
        """Re-fetches the saved lists. Returns render_lists() plus the route."""
        session = self.ctx.session
        if not session.is_authenticated:
            return (*self.render_lists(viewing_id), gr.update())
        epoch = session.epoch
        try:
            lists = self.ctx.lists_client.fetch_lists()
        except AuthError as e:
            route = self._handle_auth_error(e)
            return (*self.render_lists(viewing_id, f"🔴 {e}"), route)
        except TransportError as e:
            # The cached lists stay as they were
            gr.Warning(f"Error fetching lists: {e}")
            return (*self.render_lists(viewing_id, f"🔴 Error fetching lists, showing cached copy: {e}"), gr.update())
        if not session.is_current(epoch):
            logger.info("Discarding list fetch started by a previous session.")
            return _unchanged(5)
        self.ctx.saved_lists.replace(lists)
        return (*self.render_lists(viewing_id, f"✅ Lists refreshed at {_now()}."), gr.update())

    def on_select_list(self, df: pd.DataFrame, evt: gr.SelectData):
        """Shows the images of the clicked row's list. Returns (title, gallery, viewed list id, item index)."""
        if df is None or df.empty or evt.index is None:
            return _unchanged(4)
        list_id = str(df.iloc[evt.index[0]]['ID'])
        return (*self._viewing(list_id), list_id, None)

    def on_select_item(self, viewing_id, evt: gr.SelectData):
        """Returns (item status, selected item index)."""
        viewing = self.ctx.saved_lists.get(viewing_id) if viewing_id else None
        if viewing is None or evt.index is None or not 0 <= evt.index < len(viewing.codes):
            return "No item selected.", None
        return f"Selected {viewing.codes[evt.index]}.", evt.index

    def delete_viewed_list(self, viewing_id):
        """Deletes the viewed list. Returns render_lists() plus route, viewed list id and item index."""
        viewing = self.ctx.saved_lists.get(viewing_id) if viewing_id else None
        if viewing is None:
            gr.Warning("Select a list first.")
            return (*self.render_lists(None, "⚠️ Select a list first."), gr.update(), None, None)
        epoch = self.ctx.session.epoch
        try:
            self.ctx.lists_client.delete_list(viewing.id)
        except AuthError as e:
            route = self._handle_auth_error(e)
            return (*self.render_lists(None, f"🔴 {e}"), route, None, None)
        except TransportError as e:
            gr.Warning(f"Error deleting list: {e}")
            return (*self.render_lists(viewing_id, f"🔴 Error deleting list: {e}"), *_unchanged(3))
        if not self.ctx.session.is_current(epoch):
            logger.info("Discarding list deletion confirmed for a previous session.")
            return _unchanged(7)
        self.ctx.saved_lists.remove_list(viewing.id)
        return (*self.render_lists(None, f"✅ List '{viewing.name}' deleted."), gr.update(), None, None)

    def delete_selected_item(self, viewing_id, index):
        """Removes the selected code from the viewed list. Returns render_lists() plus route and item index."""
        viewing = self.ctx.saved_lists.get(viewing_id) if viewing_id else None
        if viewing is None or index is None or not 0 <= index < len(viewing.codes):
            gr.Warning("Select an item of a list first.")
            return (*self.render_lists(viewing_id, "⚠️ Select an item of a list first."), gr.update(), None)
        code = viewing.codes[index]
        epoch = self.ctx.session.epoch
        try:
            updated = self.ctx.lists_client.delete_item(viewing.id, code)
        except AuthError as e:
            route = self._handle_auth_error(e)
            return (*self.render_lists(None, f"🔴 {e}"), route, None)
        except TransportError as e:
            gr.Warning(f"Error deleting item: {e}")
            return (*self.render_lists(viewing_id, f"🔴 Error deleting item: {e}"), *_unchanged(2))
        if not self.ctx.session.is_current(epoch):
            logger.info("Discarding item deletion confirmed for a previous session.")
            return _unchanged(6)
        self.ctx.saved_lists.remove_item(viewing.id, code, updated)
        return (*self.render_lists(viewing_id, f"✅ Removed {code} from '{viewing.name}'."), gr.update(), None)
