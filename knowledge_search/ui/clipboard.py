"""Browser clipboard access through NiceGUI's JavaScript bridge."""

import json

from nicegui import ui

from knowledge_search.assistant import ClipboardUnavailable

# Resolves to false when the async clipboard API is missing or rejects
# (e.g. inside an iframe without clipboard permission)
PRIMARY_COPY_JS = """
if (!navigator.clipboard) return false;
return navigator.clipboard.writeText({text}).then(() => true, () => false);
"""

LEGACY_COPY_JS = """
const area = document.createElement('textarea');
area.value = {text};
document.body.appendChild(area);
area.select();
const copied = document.execCommand('copy');
document.body.removeChild(area);
return copied;
"""


class BrowserClipboard:
    """Clipboard of the browser tab currently handling the event."""

    async def _run(self, script: str, text: str) -> None:
        try:
            copied = await ui.run_javascript(script.format(text=json.dumps(text)))
        except TimeoutError as e:
            raise ClipboardUnavailable("Browser did not respond") from e
        if not copied:
            raise ClipboardUnavailable("Browser refused the copy")

    async def write(self, text: str) -> None:
        await self._run(PRIMARY_COPY_JS, text)

    async def write_legacy(self, text: str) -> None:
        await self._run(LEGACY_COPY_JS, text)
