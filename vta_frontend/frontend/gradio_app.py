"""Gradio-powered chat workspace and admin document dashboard."""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict

import gradio as gr
import httpx

from ..config import Settings
from ..dependencies import AdminWorkspace, ChatWorkspace, build_admin_workspace, build_chat_workspace
from ..notifications import Notification
from ..recording.microphone import chunk_from_array
from .rendering import (
    LOGGED_OUT_SESSIONS_TEXT,
    STATUS_CSS,
    browser_tokens,
    chatbot_messages,
    manuals_markdown,
    notification_html,
    session_choices,
    sessions_hint,
    status_message,
)

HELP_TEXT = dedent(
    """
    ### Getting Started
    - Type your question in the input field at the bottom of the chat.
    - Click the send button or press Enter to submit your question.
    - Use the microphone to ask questions via voice input.
    - Browse your chat history in the sidebar (login required).

    ### Tips
    - Be specific in your questions for more accurate answers.
    - You can ask follow-up questions to get more detailed information.
    - Use the 'New chat' button in the sidebar to start a fresh conversation.
    """
).strip()

USAGE_GUIDELINES_TEXT = dedent(
    """
    ### Do's
    - Ask questions related to Bosch products, services, and technologies.
    - Provide context to your questions for more accurate answers.
    - Report any issues or bugs you encounter while using the chatbot.

    ### Don'ts
    - Do not share personal or sensitive information in your queries.
    - Avoid using offensive language or asking inappropriate questions.
    - Do not rely on the chatbot for critical decision-making without verification.

    Remember, the chatbot is an AI assistant and may not always provide perfect answers.
    For critical information, please consult official Bosch documentation or contact customer support.
    """
).strip()


def _toast(notifications: Sequence[Notification]) -> None:
    for notification in notifications:
        if notification.level == "error":
            gr.Warning(notification.description)
        else:
            gr.Info(notification.description)


def create_frontend(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> gr.Blocks:
    """Return a configured Gradio Blocks interface."""

    title = settings.frontend.title

    def _build(tokens: Dict[str, str] | None) -> tuple[ChatWorkspace, AdminWorkspace]:
        storage: Dict[str, str] = dict(tokens or {})
        chat_ws = build_chat_workspace(storage, settings=settings, transport=transport)
        admin_ws = build_admin_workspace(storage, settings=settings, transport=transport)
        return chat_ws, admin_ws

    def _chat_ws(workspace: ChatWorkspace | None) -> ChatWorkspace:
        if workspace is None:
            return build_chat_workspace({}, settings=settings, transport=transport)
        return workspace

    def _admin_ws(workspace: AdminWorkspace | None) -> AdminWorkspace:
        if workspace is None:
            return build_admin_workspace({}, settings=settings, transport=transport)
        return workspace

    def _chat_view(workspace: ChatWorkspace) -> tuple[Any, ...]:
        notifications = workspace.notifications.drain()
        _toast(notifications)
        chat = workspace.chat
        logged_in = workspace.session_store.is_logged_in
        sessions = chat.registry.sessions
        return (
            workspace,
            chatbot_messages(chat.history.messages),
            gr.update(choices=session_choices(sessions), value=chat.registry.active_id),
            sessions_hint(logged_in, sessions),
            chat.loading_message,
            notification_html(notifications),
            gr.update(visible=not logged_in),
            gr.update(visible=logged_in),
            browser_tokens(workspace.storage),
        )

    def _admin_view(workspace: AdminWorkspace) -> tuple[Any, ...]:
        notifications = workspace.notifications.drain()
        _toast(notifications)
        dashboard = workspace.dashboard
        logged_in = workspace.session_store.is_logged_in
        return (
            workspace,
            gr.update(visible=not logged_in),
            gr.update(visible=logged_in),
            manuals_markdown(dashboard.registry.manuals),
            status_message(dashboard.error or "", "error"),
            gr.update(visible=dashboard.can_retry),
            notification_html(notifications),
        )

    async def load_action(tokens: Dict[str, str] | None) -> tuple[Any, ...]:
        """Adopt the tokens persisted in the browser and prefetch their data."""

        chat_ws, admin_ws = _build(tokens)
        if chat_ws.session_store.is_logged_in:
            await chat_ws.chat.refresh_sessions()
        if admin_ws.session_store.is_logged_in:
            await admin_ws.dashboard.refresh()
        return (*_chat_view(chat_ws), *_admin_view(admin_ws))

    async def login_action(email: str, password: str, workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        await workspace.chat.login(email, password)
        return _chat_view(workspace)

    async def register_action(email: str, password: str, workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        await workspace.chat.register(email, password)
        return _chat_view(workspace)

    def logout_action(workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        workspace.recorder.cancel()
        workspace.chat.logout()
        return _chat_view(workspace)

    async def new_chat_action(workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        if not workspace.session_store.is_logged_in:
            workspace.chat.prompt_login()
        else:
            await workspace.chat.start_new_chat()
        return _chat_view(workspace)

    async def select_thread_action(session_id: str | None, workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        if session_id:
            await workspace.chat.select_thread(session_id)
        return _chat_view(workspace)

    async def submit_action(text: str, workspace: ChatWorkspace | None) -> AsyncIterator[tuple[Any, ...]]:
        """Show the optimistic question right away, then the settled answer."""

        workspace = _chat_ws(workspace)
        task = asyncio.create_task(workspace.chat.submit_query(text))
        await asyncio.sleep(0)
        if not task.done():
            yield ("", *_chat_view(workspace))
        await task
        yield ("", *_chat_view(workspace))

    def start_recording_action(workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        workspace.recorder.start()
        return _chat_view(workspace)

    def stream_audio_action(chunk: tuple[int, Any] | None, workspace: ChatWorkspace | None) -> None:
        if workspace is None or chunk is None:
            return
        sample_rate, samples = chunk
        workspace.recorder.feed(chunk_from_array(sample_rate, samples))

    async def stop_recording_action(workspace: ChatWorkspace | None) -> tuple[Any, ...]:
        workspace = _chat_ws(workspace)
        await workspace.recorder.stop()
        return _chat_view(workspace)

    async def admin_login_action(email: str, password: str, workspace: AdminWorkspace | None) -> tuple[Any, ...]:
        workspace = _admin_ws(workspace)
        await workspace.dashboard.login(email, password)
        return (*_admin_view(workspace), browser_tokens(workspace.storage))

    def admin_logout_action(workspace: AdminWorkspace | None) -> tuple[Any, ...]:
        workspace = _admin_ws(workspace)
        workspace.dashboard.logout()
        return (*_admin_view(workspace), browser_tokens(workspace.storage))

    async def refresh_documents_action(workspace: AdminWorkspace | None) -> tuple[Any, ...]:
        workspace = _admin_ws(workspace)
        await workspace.dashboard.refresh()
        return _admin_view(workspace)

    async def upload_action(file_path: str | None, workspace: AdminWorkspace | None) -> tuple[Any, ...]:
        workspace = _admin_ws(workspace)
        if file_path:
            path = Path(file_path)
            await workspace.dashboard.upload(path.name, path.read_bytes())
        return (*_admin_view(workspace), None)

    with gr.Blocks(title=title, css=STATUS_CSS) as demo:
        browser_state = gr.BrowserState({}, storage_key=settings.storage.browser_storage_key)
        chat_state = gr.State(None)
        admin_state = gr.State(None)

        with gr.Tab("Chat"):
            gr.Markdown(f"# {title}")
            with gr.Row():
                with gr.Column(scale=1, min_width=240):
                    new_chat_button = gr.Button("New chat")
                    thread_picker = gr.Radio(label="Chats", choices=[], interactive=True)
                    sessions_md = gr.Markdown(LOGGED_OUT_SESSIONS_TEXT)
                    with gr.Accordion("Help", open=False):
                        gr.Markdown(HELP_TEXT)
                    with gr.Accordion("Usage guidelines", open=False):
                        gr.Markdown(USAGE_GUIDELINES_TEXT)

                with gr.Column(scale=3):
                    with gr.Group(visible=True) as login_group:
                        email_input = gr.Textbox(label="Email", placeholder="you@example.com")
                        password_input = gr.Textbox(label="Password", type="password")
                        with gr.Row():
                            login_button = gr.Button("Login", variant="primary")
                            register_button = gr.Button("Register")
                    logout_button = gr.Button("Logout", visible=False)
                    chat_notice = gr.HTML("")
                    chatbot = gr.Chatbot(type="messages", height=520, label=title)
                    loading_md = gr.Markdown("")
                    with gr.Row():
                        query_input = gr.Textbox(
                            placeholder="Ask about Bosch products, services, or technologies...",
                            show_label=False,
                            scale=4,
                        )
                        send_button = gr.Button("Send", variant="primary", scale=1)
                    microphone = gr.Audio(
                        sources=["microphone"],
                        type="numpy",
                        streaming=True,
                        label="Voice question",
                    )

        with gr.Tab("Admin"):
            gr.Markdown(f"# {settings.frontend.admin_title}")
            with gr.Group(visible=True) as admin_login_group:
                gr.Markdown("Enter your credentials to access the admin dashboard")
                admin_email_input = gr.Textbox(label="Email", placeholder="admin@example.com")
                admin_password_input = gr.Textbox(label="Password", type="password")
                admin_login_button = gr.Button("Login", variant="primary")
            with gr.Group(visible=False) as admin_dashboard_group:
                gr.Markdown("## Upload Document\nUpload documents to the vector database for processing. Supported formats: .pdf")
                document_upload = gr.File(label="Select File", file_types=[".pdf"], type="filepath")
                gr.Markdown("## Vector Database Files")
                manuals_md = gr.Markdown("")
                admin_error = gr.HTML("")
                retry_button = gr.Button("Retry", visible=False, size="sm")
                admin_logout_button = gr.Button("Logout", variant="stop")
            admin_notice = gr.HTML("")

        chat_outputs = [
            chat_state,
            chatbot,
            thread_picker,
            sessions_md,
            loading_md,
            chat_notice,
            login_group,
            logout_button,
            browser_state,
        ]
        admin_outputs = [
            admin_state,
            admin_login_group,
            admin_dashboard_group,
            manuals_md,
            admin_error,
            retry_button,
            admin_notice,
        ]

        demo.load(load_action, inputs=[browser_state], outputs=[*chat_outputs, *admin_outputs])

        login_button.click(login_action, inputs=[email_input, password_input, chat_state], outputs=chat_outputs)
        register_button.click(register_action, inputs=[email_input, password_input, chat_state], outputs=chat_outputs)
        logout_button.click(logout_action, inputs=[chat_state], outputs=chat_outputs)
        new_chat_button.click(new_chat_action, inputs=[chat_state], outputs=chat_outputs)
        thread_picker.input(select_thread_action, inputs=[thread_picker, chat_state], outputs=chat_outputs)

        submit_outputs = [query_input, *chat_outputs]
        query_input.submit(submit_action, inputs=[query_input, chat_state], outputs=submit_outputs)
        send_button.click(submit_action, inputs=[query_input, chat_state], outputs=submit_outputs)

        microphone.start_recording(start_recording_action, inputs=[chat_state], outputs=chat_outputs)
        microphone.stream(
            stream_audio_action,
            inputs=[microphone, chat_state],
            outputs=None,
            stream_every=0.5,
            time_limit=settings.recording.max_seconds,
        )
        microphone.stop_recording(stop_recording_action, inputs=[chat_state], outputs=chat_outputs)

        admin_login_button.click(
            admin_login_action,
            inputs=[admin_email_input, admin_password_input, admin_state],
            outputs=[*admin_outputs, browser_state],
        )
        admin_logout_button.click(admin_logout_action, inputs=[admin_state], outputs=[*admin_outputs, browser_state])
        retry_button.click(refresh_documents_action, inputs=[admin_state], outputs=admin_outputs)
        document_upload.upload(upload_action, inputs=[document_upload, admin_state], outputs=[*admin_outputs, document_upload])

    return demo


__all__ = ["create_frontend"]
