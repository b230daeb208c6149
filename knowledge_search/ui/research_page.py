"""NiceGUI research assistant page.

Renders the ResearchAssistant and UploadPipeline state; every action is
delegated to them.
"""

import logging

from nicegui import ui
from nicegui.events import MultiUploadEventArguments

from knowledge_search.agent.client import get_agent_client
from knowledge_search.assistant import ResearchAssistant
from knowledge_search.config import get_config
from knowledge_search.ingestion.pipeline import UploadPipeline, UploadStatus
from knowledge_search.models.formatting import (
    confidence_level,
    describe_sources,
    format_confidence,
)
from knowledge_search.models.schemas import CandidateFile, Role, Turn
from knowledge_search.ui.clipboard import BrowserClipboard

logger = logging.getLogger(__name__)

EXAMPLE_QUESTIONS = [
    "What are the key findings in the research?",
    "Summarize the methodology used",
    "What conclusions were drawn?",
]

CONFIDENCE_CLASSES = {
    "high": "text-green-400 border-green-400",
    "medium": "text-yellow-400 border-yellow-400",
    "low": "text-red-400 border-red-400",
}

UPLOAD_STATUS_TEXT = {
    UploadStatus.UPLOADING: "Uploading files...",
    UploadStatus.INDEXING: "Indexing documents...",
    UploadStatus.SUCCESS: "Upload complete!",
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #020617; color: #f1f5f9; }

    .sidebar { background: #0f172a; border-right: 1px solid #1e293b; }

    .logo { background: linear-gradient(135deg, #3b82f6 0%, #2563eb 100%); }

    .doc-item { background: rgba(30, 41, 59, 0.5); border-radius: 8px; }
    .doc-item:hover { background: #1e293b; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 16px 4px 16px 16px;
    }

    .answer-card { background: #1e293b; border: 1px solid #334155; }

    .source-panel { border: 1px solid #334155; background: rgba(30, 41, 59, 0.3); }

    .suggestion { background: rgba(59, 130, 246, 0.1); border: 1px solid rgba(59, 130, 246, 0.3); }
</style>
"""


async def _read_candidates(e: MultiUploadEventArguments) -> list[CandidateFile]:
    return [
        CandidateFile(name=f.name, content_type=f.content_type or "", content=await f.read())
        for f in e.files
    ]


@ui.page("/")
def research_page() -> None:
    """Main research assistant page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.dark_mode().enable()

    config = get_config()

    def refresh() -> None:
        transcript.refresh()
        sidebar.refresh()
        input_row.refresh()
        scroll.scroll_to(percent=1.0)

    assistant = ResearchAssistant(
        get_agent_client(),
        config=config,
        clipboard=BrowserClipboard(),
        on_change=refresh,
    )

    upload_dialog: ui.dialog

    def close_upload_dialog() -> None:
        upload_dialog.close()

    pipeline = UploadPipeline(
        config=config,
        on_complete=assistant.documents_uploaded,
        on_close=close_upload_dialog,
        on_change=lambda: upload_panel.refresh(),
    )

    def teardown() -> None:
        logger.info(f"Client for session {assistant.session.session_id[:8]} left")
        pipeline.cancel()
        assistant.dispose()

    ui.context.client.on_disconnect(teardown)

    # === Sidebar ===

    @ui.refreshable
    def sidebar() -> None:
        with ui.column().classes("w-full flex-grow gap-2 px-4 overflow-auto"):
            ui.label("Documents").classes(
                "text-xs font-semibold text-slate-400 uppercase tracking-wider py-2"
            )
            if not len(assistant.documents):
                with ui.column().classes("w-full items-center py-8 text-slate-500"):
                    ui.icon("description").classes("text-3xl opacity-50")
                    ui.label("No documents uploaded").classes("text-xs")
            for index, doc in enumerate(assistant.documents):
                with ui.row().classes("doc-item w-full p-3 items-center no-wrap"):
                    ui.icon("description").classes("text-blue-400")
                    with ui.column().classes("flex-grow gap-0 min-w-0"):
                        ui.label(doc.name).classes("text-sm text-white truncate")
                        ui.label(doc.upload_date.strftime("%b %d, %I:%M %p")).classes(
                            "text-xs text-slate-400"
                        )
                    ui.button(
                        icon="delete",
                        on_click=lambda i=index: assistant.remove_document(i),
                    ).props("flat dense round color=red-4")

        with ui.column().classes("w-full p-4 border-t border-slate-800"):
            with ui.column().classes("w-full doc-item p-3 gap-1"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("storage").classes("text-blue-400")
                    ui.label("Knowledge Base").classes("text-xs font-semibold text-white")
                with ui.row().classes("w-full justify-between text-xs"):
                    ui.label("Documents:").classes("text-slate-400")
                    ui.label(str(len(assistant.documents))).classes("text-white font-medium")
                if assistant.documents.last_updated is not None:
                    with ui.row().classes("w-full justify-between text-xs"):
                        ui.label("Last updated:").classes("text-slate-400")
                        ui.label(assistant.documents.last_updated.strftime("%x")).classes(
                            "text-white font-medium"
                        )

    # === Transcript ===

    def render_user_turn(turn: Turn) -> None:
        with ui.row().classes("w-full justify-end"):
            ui.label(turn.content).classes("message-user max-w-3xl px-4 py-3")

    def render_assistant_turn(turn: Turn) -> None:
        response = turn.response
        metadata = turn.metadata

        with ui.card().classes("answer-card w-full max-w-4xl"):
            with ui.row().classes("w-full items-center justify-between"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("chat").classes("text-blue-400")
                    ui.label("Answer").classes("text-white font-semibold")
                with ui.row().classes("items-center gap-2"):
                    if response is not None and response.confidence is not None:
                        level = confidence_level(response.confidence)
                        ui.badge(
                            f"{format_confidence(response.confidence)} confident"
                        ).props("outline").classes(CONFIDENCE_CLASSES[level])
                    if response is not None and response.context_maintained:
                        ui.badge("Context maintained").props("outline").classes(
                            "text-blue-400 border-blue-400"
                        )
                    ui.button(
                        icon="content_copy",
                        on_click=lambda text=turn.content: assistant.copy_to_clipboard(text),
                    ).props("flat dense round color=grey-5")

            ui.label(turn.content).classes("text-slate-100 whitespace-pre-wrap")

            if response is not None and response.sources:
                ui.label(f"Sources ({len(response.sources)})").classes(
                    "text-sm font-semibold text-slate-300"
                )
                for index, source in enumerate(describe_sources(response.sources)):
                    with ui.expansion(f"[{index + 1}] {source.title}").classes(
                        "source-panel w-full rounded-lg text-white"
                    ):
                        if source.page_number:
                            ui.label(f"Page {source.page_number}").classes(
                                "text-xs text-slate-400"
                            )
                        ui.label(source.excerpt).classes("text-sm text-slate-300")

            if response is not None and response.follow_up_suggestions:
                ui.label("Suggested questions").classes("text-sm font-semibold text-slate-300")
                for suggestion in response.follow_up_suggestions:
                    ui.label(suggestion).classes(
                        "suggestion rounded-lg px-3 py-2 text-sm text-blue-300"
                    )

            if metadata is not None:
                with ui.row().classes("gap-4 text-xs text-slate-500 pt-2 border-t border-slate-700"):
                    if metadata.documents_searched is not None:
                        ui.label(f"{metadata.documents_searched} documents searched")
                    if metadata.retrieval_method:
                        ui.label(f"Method: {metadata.retrieval_method}")
                    if metadata.timestamp:
                        ui.label(metadata.timestamp)

    @ui.refreshable
    def transcript() -> None:
        if assistant.conversation.is_empty:
            with ui.column().classes("w-full items-center justify-center py-16 gap-3"):
                with ui.element("div").classes("logo rounded-2xl p-4"):
                    ui.icon("search").classes("text-white text-3xl")
                ui.label("Start Your Research").classes("text-2xl font-bold text-white")
                ui.label(
                    "Ask anything about your uploaded documents "
                    "and get AI-powered answers with citations"
                ).classes("text-slate-400")
                for example in EXAMPLE_QUESTIONS:
                    ui.label(example).classes("doc-item px-4 py-3 text-sm text-slate-300 w-96")
            return

        with ui.column().classes("w-full gap-4"):
            for turn in assistant.conversation:
                if turn.role == Role.USER:
                    render_user_turn(turn)
                else:
                    render_assistant_turn(turn)
            if assistant.is_loading:
                with ui.row().classes("items-center gap-2 text-slate-400"):
                    ui.spinner(size="sm")
                    ui.label("Searching knowledge base...").classes("text-sm")

    # === Input ===

    async def send_question() -> None:
        text = question_input.value
        if not text.strip() or assistant.is_loading:
            return
        question_input.value = ""
        await assistant.submit_question(text)

    @ui.refreshable
    def input_row() -> None:
        send_btn = ui.button("Search", icon="send", on_click=send_question).props(
            "unelevated color=blue-6"
        )
        if assistant.is_loading:
            send_btn.disable()
            question_input.disable()
        else:
            question_input.enable()

    # === Upload dialog ===

    async def handle_files(e: MultiUploadEventArguments) -> None:
        candidates = await _read_candidates(e)
        accepted = pipeline.select_files(candidates)
        logger.debug(f"Accepted {accepted} of {len(candidates)} selected files")
        picker.reset()

    @ui.refreshable
    def upload_panel() -> None:
        if pipeline.selected_files:
            ui.label(f"Selected files ({len(pipeline.selected_files)})").classes(
                "text-sm font-semibold text-slate-300"
            )
            for f in pipeline.selected_files:
                with ui.row().classes("doc-item w-full p-2 items-center justify-between"):
                    ui.label(f.name).classes("text-sm text-white")
                    ui.label(f"{f.size / 1024 / 1024:.2f} MB").classes("text-xs text-slate-400")

        if pipeline.status != UploadStatus.IDLE:
            ui.linear_progress(value=pipeline.progress / 100, show_value=False).classes("w-full")
            if pipeline.status == UploadStatus.ERROR:
                with ui.row().classes("items-center gap-2 text-red-400"):
                    ui.icon("error")
                    ui.label(pipeline.error_message or "Upload failed").classes("text-sm")
            elif pipeline.status == UploadStatus.SUCCESS:
                with ui.row().classes("items-center gap-2 text-green-400"):
                    ui.icon("check_circle")
                    ui.label(UPLOAD_STATUS_TEXT[pipeline.status]).classes("text-sm")
            else:
                with ui.row().classes("items-center gap-2 text-slate-300"):
                    ui.spinner(size="sm")
                    ui.label(UPLOAD_STATUS_TEXT[pipeline.status]).classes("text-sm")

        count = len(pipeline.selected_files)
        with ui.row().classes("w-full justify-end gap-2"):
            cancel_btn = ui.button("Cancel", on_click=cancel_upload_dialog).props("outline")
            label = f"Upload {count} {'file' if count == 1 else 'files'}"
            upload_btn = ui.button(
                "Uploading..." if pipeline.in_flight else label,
                icon="upload",
                on_click=pipeline.upload,
            ).props("unelevated color=blue-6")
            if pipeline.in_flight:
                cancel_btn.disable()
            if not pipeline.can_upload:
                upload_btn.disable()

    def cancel_upload_dialog() -> None:
        pipeline.dismiss()
        upload_dialog.close()

    with ui.dialog() as upload_dialog, ui.card().classes("answer-card w-[32rem]"):
        ui.label("Upload Documents").classes("text-lg font-semibold text-white")
        ui.label(
            "Add PDF documents to your knowledge base for AI-powered search"
        ).classes("text-sm text-slate-400")
        picker = (
            ui.upload(multiple=True, auto_upload=True, on_multi_upload=handle_files)
            .props("accept=.pdf flat bordered color=blue-6")
            .classes("w-full")
        )
        ui.label(
            f"PDF files supported • Max {config.max_file_size_mb}MB per file"
        ).classes("text-xs text-slate-500")
        upload_panel()

    upload_dialog.on_value_change(lambda e: None if e.value else pipeline.dismiss())

    # === Layout ===

    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("sidebar w-60 h-screen gap-0"):
            with ui.row().classes("w-full p-4 items-center gap-3 border-b border-slate-800"):
                with ui.element("div").classes("logo rounded-lg p-2"):
                    ui.icon("menu_book").classes("text-white text-2xl")
                with ui.column().classes("gap-0"):
                    ui.label("KnowledgeSearch").classes("text-lg font-bold text-white")
                    ui.label("AI Research Tool").classes("text-xs text-slate-400")
            with ui.column().classes("w-full p-4"):
                ui.button("Upload Documents", icon="upload", on_click=upload_dialog.open).props(
                    "unelevated color=blue-6"
                ).classes("w-full")
            sidebar()
            with ui.column().classes("w-full p-4 border-t border-slate-800"):
                ui.button(
                    "New Chat", icon="add", on_click=assistant.start_new_conversation
                ).props("outline color=grey-5").classes("w-full")

        with ui.column().classes("flex-grow h-screen gap-0"):
            with ui.row().classes("w-full px-6 py-4 items-center justify-between border-b border-slate-800"):
                with ui.row().classes("items-center gap-3"):
                    ui.label("KnowledgeSearch AI").classes("text-xl font-bold text-white")
                    ui.badge("Research Assistant").props("outline").classes(
                        "text-blue-400 border-blue-400"
                    )
                with ui.row().classes("items-center gap-2 text-green-400").bind_visibility_from(
                    assistant.status, "message", backward=bool
                ):
                    ui.icon("check_circle")
                    ui.label().bind_text_from(assistant.status, "message").classes("text-sm")

            with ui.scroll_area().classes("flex-grow w-full p-6") as scroll:
                transcript()

            with ui.row().classes("w-full p-4 gap-3 items-center border-t border-slate-800 no-wrap"):
                question_input = (
                    ui.input(placeholder="Ask anything about your documents...")
                    .props("outlined dark dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_question)
                )
                input_row()
