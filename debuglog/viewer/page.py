"""
The single-page viewer served at ``GET /``.

Everything the browser needs lives in this one document. The page keeps its
own polling state (last seen content + parsed entries), so every open tab
tails the store file independently:

- every ``POLL_INTERVAL_MS`` it fetches ``/logs``
- unchanged text -> nothing is re-rendered
- changed text   -> the whole file is reparsed and the whole list re-rendered
- fetch errors are ignored and polling simply goes on
"""
from debuglog.constants.constants import EMPTY_LOG_MESSAGE, POLL_INTERVAL_MS

VIEWER_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>Debug Log Viewer</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Consolas', ui-monospace, Menlo, monospace;
            background: #1e1e1e;
            color: #d4d4d4;
            height: 100vh;
            display: flex;
            flex-direction: column;
        }
        .header {
            background: #252526;
            padding: 12px 16px;
            border-bottom: 1px solid #3c3c3c;
            display: flex;
            justify-content: space-between;
            align-items: center;
            flex-shrink: 0;
        }
        h1 { color: #4ec9b0; font-size: 15px; font-weight: 500; }
        .status { color: #858585; font-size: 12px; display: flex; align-items: center; gap: 8px; }
        .dot {
            width: 8px;
            height: 8px;
            border-radius: 50%;
            background: #4ec9b0;
            animation: pulse 2s infinite;
        }
        @keyframes pulse {
            0%, 100% { opacity: 1; }
            50% { opacity: 0.5; }
        }
        .controls {
            background: #252526;
            padding: 8px 16px;
            border-bottom: 1px solid #3c3c3c;
            display: flex;
            gap: 12px;
            align-items: center;
            flex-shrink: 0;
        }
        .controls label {
            color: #858585;
            font-size: 12px;
            display: flex;
            align-items: center;
            gap: 6px;
            cursor: pointer;
        }
        button {
            padding: 4px 12px;
            background: #007acc;
            border: none;
            border-radius: 4px;
            color: #d4d4d4;
            font-size: 12px;
            cursor: pointer;
        }
        button:hover { background: #0098ff; }
        .logs-container { flex: 1; overflow-y: auto; padding: 16px; }
        .log-entry {
            padding: 8px 12px;
            margin-bottom: 4px;
            border-radius: 4px;
            border-left: 4px solid #555;
            background: #252526;
            font-size: 13px;
            line-height: 1.5;
        }
        .log-entry:hover { background: #2d2d30; }
        .log-entry.error { border-left-color: #f48771; }
        .log-entry.warn { border-left-color: #dcdcaa; }
        .log-entry.info { border-left-color: #4ec9b0; }
        .log-timestamp { color: #858585; font-size: 11px; margin-bottom: 4px; }
        .log-data { white-space: pre-wrap; word-break: break-all; }
        .empty { color: #858585; text-align: center; padding: 40px; font-size: 14px; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Debug Log Viewer</h1>
        <div class="status"><div class="dot"></div>Live</div>
    </div>

    <div class="controls">
        <label><input type="checkbox" id="autoScroll" checked> Auto-scroll</label>
        <label><input type="checkbox" id="prettyPrint" checked> Pretty print JSON</label>
        <button id="clearButton">Clear display</button>
    </div>

    <div class="logs-container" id="log"><div class="empty">__EMPTY_MESSAGE__</div></div>

    <script>
        const POLL_INTERVAL_MS = __POLL_INTERVAL_MS__;
        const EMPTY_HTML = '<div class="empty">__EMPTY_MESSAGE__</div>';

        const logEl = document.getElementById('log');
        const autoScrollEl = document.getElementById('autoScroll');
        const prettyPrintEl = document.getElementById('prettyPrint');

        // Per-page polling state.
        const session = { lastContent: '', entries: [] };

        function escapeHtml(text) {
            return text
                .replace(/&/g, '&amp;')
                .replace(/</g, '&lt;')
                .replace(/>/g, '&gt;')
                .replace(/"/g, '&quot;');
        }

        // Heuristic: error/fail > warn > info > none.
        function getLevel(data) {
            const str = typeof data === 'string' ? data.toLowerCase() : JSON.stringify(data).toLowerCase();
            if (str.includes('error') || str.includes('fail')) return 'error';
            if (str.includes('warn')) return 'warn';
            if (str.includes('info')) return 'info';
            return '';
        }

        function formatData(data) {
            if (!prettyPrintEl.checked) return data;
            try {
                return JSON.stringify(JSON.parse(data), null, 2);
            } catch {
                return data;
            }
        }

        function parseLogContent(content) {
            return content.trim().split('\\n').filter(Boolean).map(line => {
                const match = line.match(/^\\[([^\\]]+)\\]\\s*(.*)$/);
                if (match) {
                    return { time: match[1], data: match[2] };
                }
                return { time: '', data: line };
            });
        }

        function renderEntries() {
            if (session.entries.length === 0) {
                logEl.innerHTML = EMPTY_HTML;
                return;
            }
            logEl.innerHTML = session.entries.map(e => `
                <div class="log-entry ${getLevel(e.data)}">
                    <div class="log-timestamp">${escapeHtml(e.time)}</div>
                    <div class="log-data">${escapeHtml(formatData(e.data))}</div>
                </div>
            `).join('');
            if (autoScrollEl.checked) {
                logEl.scrollTop = logEl.scrollHeight;
            }
        }

        async function poll() {
            try {
                const res = await fetch('/logs');
                const content = await res.text();
                if (content !== session.lastContent) {
                    session.lastContent = content;
                    session.entries = parseLogContent(content);
                    renderEntries();
                }
            } catch {
                // next tick retries
            }
            setTimeout(poll, POLL_INTERVAL_MS);
        }

        function clearLog() {
            session.entries = [];
            renderEntries();
        }

        document.getElementById('clearButton').addEventListener('click', clearLog);
        prettyPrintEl.addEventListener('change', renderEntries);
        poll();
    </script>
</body>
</html>
"""


def render_viewer_page(poll_interval_ms: int = POLL_INTERVAL_MS) -> str:
    return (
        VIEWER_HTML
        .replace("__POLL_INTERVAL_MS__", str(int(poll_interval_ms)))
        .replace("__EMPTY_MESSAGE__", EMPTY_LOG_MESSAGE)
    )
