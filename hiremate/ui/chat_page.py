"""NiceGUI coach chat page built on the streaming chat client."""

from datetime import datetime

from nicegui import ui

from hiremate.client import ChatClient, ConversationSession, ConversationTurn
from hiremate.client.config import get_client_config
from hiremate.ui.markdown import clean_response, markdown_to_html

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: linear-gradient(135deg, #4f46e5 0%, #7c3aed 100%); }
    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-bot {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .message-bot code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def _time_label(timestamp: datetime) -> str:
    return timestamp.strftime("%I:%M %p")


def render_turn(turn: ConversationTurn) -> None:
    is_user = turn.sender == "user"
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-bot"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[75%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                if is_user:
                    content = turn.text.replace("<", "&lt;").replace("\n", "<br>")
                else:
                    content = markdown_to_html(clean_response(turn.text))
                ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
            ui.label(_time_label(turn.timestamp)).classes("text-[10px] text-gray-400")


@ui.page("/")
def chat_page() -> None:
    """Coach chat page; every visit gets its own conversation."""
    ui.add_head_html(CUSTOM_CSS)
    client = ChatClient(config=get_client_config(), session=ConversationSession())
    state = {"busy": False}

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not len(client.session):
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("work").classes("text-5xl text-gray-300")
                    ui.label("Ask your interview coach anything").classes("text-gray-400")
            for turn in client.session.turns:
                render_turn(turn)

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text or state["busy"]:
            return

        input_field.value = ""
        state["busy"] = True
        send_btn.disable()

        with messages_container:
            render_turn(ConversationTurn(sender="user", text=text))
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("message-bot px-4 py-3 max-w-[75%]"):
                    answer_html = ui.html("<em>Thinking...</em>", sanitize=False).classes(
                        "text-sm leading-relaxed"
                    )

        def on_chunk(fragment: str, total: str) -> None:
            answer_html.set_content(markdown_to_html(total))

        try:
            await client.reply(text, on_chunk)
        finally:
            state["busy"] = False
            send_btn.enable()
            refresh_messages()
        await refresh_credits()

    async def refresh_credits() -> None:
        credits = await client.fetch_credits()
        credits_label.set_text("" if credits is None else f"{credits} credits")

    def new_chat() -> None:
        client.session.clear()
        refresh_messages()

    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            ui.label("HireMate Coach").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                credits_label = ui.label("").classes("text-xs text-white/80")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Ask an interview question...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    ui.timer(0.1, refresh_credits, once=True)
