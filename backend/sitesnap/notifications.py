"""
Transient user-facing notifications (toasts)
"""

from dataclasses import dataclass, field
from typing import List, Optional

TOAST_DURATION_MS = 3000


@dataclass
class Toast:
    kind: str
    message: str
    duration: Optional[int] = TOAST_DURATION_MS


@dataclass
class Toaster:
    """Collects toasts for whatever surface displays them"""

    toasts: List[Toast] = field(default_factory=list)

    def success(self, message: str) -> Toast:
        return self._push(Toast("success", message))

    def error(self, message: str) -> Toast:
        return self._push(Toast("error", message))

    def loading(self, message: str) -> Toast:
        # Loading toasts stay until dismissed
        return self._push(Toast("loading", message, duration=None))

    def dismiss(self, toast: Toast):
        if toast in self.toasts:
            self.toasts.remove(toast)

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def _push(self, toast: Toast) -> Toast:
        self.toasts.append(toast)
        return toast
