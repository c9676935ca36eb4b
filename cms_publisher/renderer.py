"""
Markdown to HTML rendering.

Wraps mistune so the rest of the pipeline only sees a `render(body) -> html`
callable. Rendering is treated as total: an exception raised here is a
defect and is allowed to stop the run.
"""

from __future__ import annotations

from typing import Iterable

import mistune

from .config import MarkdownConfig


DEFAULT_PLUGINS = ("table", "task_lists")


class MarkdownRenderer:
    """Render Markdown article bodies to HTML with a fixed plugin set."""

    def __init__(
        self,
        plugins: Iterable[str] = DEFAULT_PLUGINS,
        escape: bool = False,
        hard_wrap: bool = False,
    ):
        self.plugins = list(plugins)
        self._markdown = mistune.create_markdown(
            escape=escape,
            hard_wrap=hard_wrap,
            plugins=self.plugins,
        )

    @classmethod
    def from_config(cls, cfg: MarkdownConfig) -> MarkdownRenderer:
        return cls(plugins=cfg.plugins, escape=cfg.escape, hard_wrap=cfg.hard_wrap)

    def render(self, body: str) -> str:
        return self._markdown(body)

    __call__ = render
