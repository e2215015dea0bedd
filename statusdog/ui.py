# statusdog/ui.py
# DESIGNER'S NOTE:
# Layout only. Each create_* function builds one screen and returns its components in a dict;
# main.py wires them to the callbacks in handlers.py.

import gradio as gr

from .handlers import LIST_COLUMNS

GALLERY_COLUMNS = 5


def create_login_view():
    """Builds the login screen."""
    with gr.Column(visible=False) as column:
        gr.Markdown("## Login to Your Account")
        email_input = gr.Textbox(label="Email Address", placeholder="user@example.com")
        password_input = gr.Textbox(label="Password", type="password")
        login_btn = gr.Button("Login", variant="primary")
        status_output = gr.Markdown()
        to_register_btn = gr.Button("Don't have an account? Sign up", variant="secondary", size="sm")

    components = {
        "column": column, "email_input": email_input, "password_input": password_input,
        "login_btn": login_btn, "status_output": status_output, "to_register_btn": to_register_btn,
    }
    return components


def create_signup_view():
    """Builds the registration screen."""
    with gr.Column(visible=False) as column:
        gr.Markdown("## Sign Up")
        name_input = gr.Textbox(label="Name")
        email_input = gr.Textbox(label="Email Address", placeholder="user@example.com")
        password_input = gr.Textbox(label="Password", type="password")
        register_btn = gr.Button("Register", variant="primary")
        status_output = gr.Markdown()
        to_login_btn = gr.Button("Already have an account? Login", variant="secondary", size="sm")

    components = {
        "column": column, "name_input": name_input, "email_input": email_input,
        "password_input": password_input, "register_btn": register_btn,
        "status_output": status_output, "to_login_btn": to_login_btn,
    }
    return components


def create_search_tab():
    """Builds the 'Search' tab: catalog filter, results and the temporary list."""
    with gr.TabItem("🔍 Search", id="search_tab") as tab:
        with gr.Row():
            filter_input = gr.Textbox(
                label="Filter", placeholder="Enter filter (e.g., 2xx, 203, 21x)", scale=3,
                info="'x' stands for any digit; the filter matches from the start of the code.",
            )
            filter_btn = gr.Button("Filter", variant="primary", scale=1)
        filtered_state = gr.State([])  # codes shown in the results gallery
        status_output = gr.Markdown()
        results_gallery = gr.Gallery(
            label="Matching codes (click one to add it)", columns=GALLERY_COLUMNS,
            height="auto", allow_preview=False,
        )

        gr.Markdown("## Temporary List")
        temp_count = gr.Markdown()
        temp_gallery = gr.Gallery(
            label="Temporary list (click one to remove it)", columns=GALLERY_COLUMNS,
            height="auto", allow_preview=False,
        )
        with gr.Row():
            list_name_input = gr.Textbox(label="List name", placeholder="Enter a name for the list", scale=3)
            save_btn = gr.Button("💾 Save", variant="primary", scale=1)

        with gr.Group(visible=True) as default_action_group:
            with gr.Row():
                add_all_btn = gr.Button("➕ Add all results", variant="secondary")
                remove_all_btn = gr.Button("🗑️ Remove all", variant="stop")
        with gr.Group(visible=False) as confirm_action_group:
            gr.Markdown("Are you sure you want to remove all items from the temporary list?")
            with gr.Row():
                confirm_yes_btn = gr.Button("⚠️ Yes, remove all", variant="stop")
                confirm_no_btn = gr.Button("❌ Keep them", variant="secondary")

    components = {
        "tab": tab, "filter_input": filter_input, "filter_btn": filter_btn, "status_output": status_output,
        "filtered_state": filtered_state,
        "results_gallery": results_gallery, "temp_count": temp_count, "temp_gallery": temp_gallery,
        "list_name_input": list_name_input, "save_btn": save_btn,
        "add_all_btn": add_all_btn, "remove_all_btn": remove_all_btn,
        "default_action_row": default_action_group, "confirm_action_row": confirm_action_group,
        "confirm_yes_btn": confirm_yes_btn, "confirm_no_btn": confirm_no_btn,
    }
    return components


def create_list_tab():
    """Builds the 'List' tab: saved lists and the images of the selected one."""
    with gr.TabItem("📋 List", id="list_tab") as tab:
        gr.Markdown("## Saved Lists")
        with gr.Row():
            refresh_btn = gr.Button("🔄 Refresh lists", variant="primary")
        status_output = gr.Markdown()
        dataframe = gr.DataFrame(headers=LIST_COLUMNS, interactive=False, wrap=True)
        gr.Markdown("Click a row to show its images.")

        viewing_state = gr.State()  # id of the list whose images are shown
        selected_item_state = gr.State()  # index of the clicked image in that list
        viewing_title = gr.Markdown()
        images_gallery = gr.Gallery(
            label="Codes (click one to select it)", columns=GALLERY_COLUMNS,
            height="auto", allow_preview=False,
        )
        item_status = gr.Markdown()
        with gr.Row():
            delete_item_btn = gr.Button("🗑️ Delete selected item", variant="secondary")
            delete_list_btn = gr.Button("🗑️ Delete list", variant="stop")

    components = {
        "tab": tab, "refresh_btn": refresh_btn, "status_output": status_output, "dataframe": dataframe,
        "viewing_state": viewing_state, "selected_item_state": selected_item_state,
        "viewing_title": viewing_title, "images_gallery": images_gallery, "item_status": item_status,
        "delete_item_btn": delete_item_btn, "delete_list_btn": delete_list_btn,
    }
    return components


def create_dashboard_view():
    """Builds the dashboard: header with logout, then the Search and List tabs."""
    with gr.Column(visible=False) as column:
        with gr.Row():
            gr.Markdown("# Dashboard")
            backend_status = gr.Markdown()
            logout_btn = gr.Button("Logout", variant="secondary", size="sm")
        with gr.Tabs() as tabs:
            search_ui = create_search_tab()
            list_ui = create_list_tab()

    components = {
        "column": column, "backend_status": backend_status, "logout_btn": logout_btn,
        "tabs": tabs, "search": search_ui, "list": list_ui,
    }
    return components
