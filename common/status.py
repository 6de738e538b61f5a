# common/status.py
from datetime import datetime

ICONS = {"info": "ℹ️", "success": "✅", "error": "❌", "warning": "⚠️"}
RULE = "═" * 47

def log(message: str = "", level: str = "info") -> None:
    """Print one status line: local timestamp, status icon, message."""
    stamp = datetime.now().strftime("%m/%d/%Y, %I:%M:%S %p")
    print(f"[{stamp}] {ICONS.get(level, ICONS['info'])} {message}")

def banner(title: str) -> None:
    print(RULE)
    print(f"🚀 {title}")
    print(RULE)
    print()
