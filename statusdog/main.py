# statusdog/main.py
# DESIGNER'S NOTE:
# This file assembles the UI and wires the event handlers.
# The queue runs one callback at a time, so the shared stores are only ever mutated sequentially.
# Per-browser view state is held in gr.State components and handed to the callbacks explicitly.

import logging
import os

import gradio as gr

from . import ui
from .config import AppConfig
from .context import build_context
from .handlers import AppHandlers
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_app(handlers: AppHandlers) -> gr.Blocks:
    """Builds the Gradio Blocks for the given handlers."""
    with gr.Blocks(theme=gr.themes.Soft(primary_hue="amber", secondary_hue="orange"), title="StatusDog") as demo:
        # --- 1. Screens ---
        route_box = gr.Textbox(visible=False)
        login_ui = ui.create_login_view()
        signup_ui = ui.create_signup_view()
        dash_ui = ui.create_dashboard_view()
        search_ui, list_ui = dash_ui["search"], dash_ui["list"]

        screens = [login_ui["column"], signup_ui["column"], dash_ui["column"]]
        filtered_state = search_ui["filtered_state"]
        viewing_state, selected_state = list_ui["viewing_state"], list_ui["selected_item_state"]
        temp_outputs = [search_ui["temp_gallery"], search_ui["temp_count"]]
        list_outputs = [
            list_ui["dataframe"], list_ui["status_output"], list_ui["viewing_title"], list_ui["images_gallery"],
            route_box,
        ]

        # --- 2. Navigation ---
        route_box.change(handlers.navigate, inputs=route_box, outputs=screens)
        demo.load(handlers.initial_route, outputs=route_box)
        demo.load(handlers.check_backend_status, outputs=dash_ui["backend_status"])
        demo.load(handlers.render_temp_list, outputs=temp_outputs)
        demo.load(handlers.render_lists, inputs=viewing_state, outputs=list_outputs[:-1]).then(
            handlers.refresh_lists, inputs=viewing_state, outputs=list_outputs
        )

        # --- 3. Login / SignUp ---
        login_ui["login_btn"].click(
            handlers.handle_login,
            inputs=[login_ui["email_input"], login_ui["password_input"]],
            outputs=[route_box, login_ui["status_output"], login_ui["password_input"]],
        ).then(
            handlers.refresh_lists, inputs=viewing_state, outputs=list_outputs
        ).then(handlers.render_temp_list, outputs=temp_outputs)
        login_ui["to_register_btn"].click(handlers.go_to_register, outputs=route_box)

        signup_ui["register_btn"].click(
            handlers.handle_register,
            inputs=[signup_ui["name_input"], signup_ui["email_input"], signup_ui["password_input"]],
            outputs=[route_box, signup_ui["status_output"], login_ui["status_output"]],
        )
        signup_ui["to_login_btn"].click(handlers.go_to_login, outputs=route_box)

        dash_ui["logout_btn"].click(handlers.handle_logout, outputs=[route_box, viewing_state, selected_state]).then(
            handlers.render_lists, inputs=viewing_state, outputs=list_outputs[:-1]
        )

        # --- 4. Search tab ---
        search_status = search_ui["status_output"]
        filter_outputs = [search_ui["results_gallery"], search_status, filtered_state]
        search_ui["filter_btn"].click(
            handlers.apply_filter, inputs=[search_ui["filter_input"], filtered_state], outputs=filter_outputs,
        )
        search_ui["filter_input"].submit(
            handlers.apply_filter, inputs=[search_ui["filter_input"], filtered_state], outputs=filter_outputs,
        )
        search_ui["add_all_btn"].click(handlers.add_all, inputs=filtered_state, outputs=temp_outputs + [search_status])
        search_ui["results_gallery"].select(
            handlers.add_from_results, inputs=filtered_state, outputs=temp_outputs + [search_status]
        )
        search_ui["temp_gallery"].select(handlers.remove_from_temp, outputs=temp_outputs + [search_status])

        confirm_rows = [search_ui["default_action_row"], search_ui["confirm_action_row"]]
        search_ui["remove_all_btn"].click(handlers.ask_confirm_remove_all, outputs=confirm_rows)
        search_ui["confirm_yes_btn"].click(handlers.confirm_remove_all, outputs=temp_outputs + [search_status] + confirm_rows)
        search_ui["confirm_no_btn"].click(handlers.cancel_remove_all, outputs=temp_outputs + [search_status] + confirm_rows)

        search_ui["save_btn"].click(
            handlers.save_list, inputs=search_ui["list_name_input"],
            outputs=temp_outputs + [search_ui["list_name_input"], search_status, route_box],
        ).then(handlers.refresh_lists, inputs=viewing_state, outputs=list_outputs)

        # --- 5. List tab ---
        list_ui["tab"].select(handlers.refresh_lists, inputs=viewing_state, outputs=list_outputs)
        list_ui["refresh_btn"].click(handlers.refresh_lists, inputs=viewing_state, outputs=list_outputs)
        list_ui["dataframe"].select(
            handlers.on_select_list, inputs=[list_ui["dataframe"]],
            outputs=[list_ui["viewing_title"], list_ui["images_gallery"], viewing_state, selected_state],
        )
        list_ui["images_gallery"].select(
            handlers.on_select_item, inputs=viewing_state, outputs=[list_ui["item_status"], selected_state]
        )
        list_ui["delete_item_btn"].click(
            handlers.delete_selected_item, inputs=[viewing_state, selected_state],
            outputs=list_outputs + [selected_state],
        )
        list_ui["delete_list_btn"].click(
            handlers.delete_viewed_list, inputs=viewing_state,
            outputs=list_outputs + [viewing_state, selected_state],
        )

    demo.queue(default_concurrency_limit=1)
    return demo


def main(argv=None):
    """
    Loads configuration, sets up logging, restores local state and launches the interface.
    """
    os.environ["GRADIO_ANALYTICS_ENABLED"] = "false"
    config = AppConfig(argv)
    setup_logging(config.LOG_DIR, config.LOG_LEVEL)

    ctx = build_context(config)
    demo = build_app(AppHandlers(ctx))

    logger.info(f"StatusDog is starting on port {config.run_port}, backend {config.ROOT_URL}")
    demo.launch(server_name="127.0.0.1", server_port=config.run_port, inbrowser=False)


if __name__ == "__main__":
    main()
