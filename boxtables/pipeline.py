"""Hook that runs formatters over a model's streamed output.

A turn of generated text arrives as chunks. Formatters see each chunk in
priority order (lowest first) and whatever one emits is fed to the next.
At turn end finish() drains every formatter, passing what it releases on
to the formatters after it. turn_feedback() then gathers the notes the
formatters want shown to the model on its next turn.

    from boxtables.pipeline import FormatterPipeline
    from boxtables.plugins.table_formatter import create_plugin

    pipeline = FormatterPipeline([create_plugin()])
    for chunk in stream:
        display(pipeline.feed(chunk))
    display(pipeline.finish())
    note = pipeline.turn_feedback()
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from boxtables.trace import trace as _trace_write


def _trace(msg: str) -> None:
    _trace_write("FormatterPipeline", msg)


@runtime_checkable
class FormatterPlugin(Protocol):
    """What a formatter must provide to sit in a FormatterPipeline.

    Formatters may also define ``get_turn_feedback() -> Optional[str]``,
    returning a note once and clearing it.
    """

    @property
    def name(self) -> str: ...

    @property
    def priority(self) -> int: ...

    def process_chunk(self, chunk: str) -> Iterable[str]: ...

    def flush(self) -> Iterable[str]: ...

    def reset(self) -> None: ...


class FormatterPipeline:
    """Ordered chain of formatters for one output stream."""

    def __init__(self, formatters: Iterable[FormatterPlugin] = ()):
        self._formatters: List[FormatterPlugin] = []
        for formatter in formatters:
            self.add(formatter)

    def add(self, formatter: FormatterPlugin) -> None:
        """Insert ``formatter`` after every formatter of equal or lower priority."""
        position = len(self._formatters)
        for idx, existing in enumerate(self._formatters):
            if formatter.priority < existing.priority:
                position = idx
                break
        self._formatters.insert(position, formatter)
        _trace(f"add: {formatter.name} (priority {formatter.priority}) at {position}")

    @property
    def names(self) -> List[str]:
        return [formatter.name for formatter in self._formatters]

    def _downstream(self, start: int, chunks: List[str]) -> str:
        for formatter in self._formatters[start:]:
            chunks = [out for chunk in chunks for out in formatter.process_chunk(chunk)]
        return "".join(chunks)

    def feed(self, chunk: str) -> str:
        """Pass one chunk through the chain; returns what is ready to show."""
        return self._downstream(0, [chunk])

    def finish(self) -> str:
        """Drain every formatter at turn end."""
        released = []
        for idx, formatter in enumerate(self._formatters):
            released.append(self._downstream(idx + 1, list(formatter.flush())))
        return "".join(released)

    def reset(self) -> None:
        for formatter in self._formatters:
            formatter.reset()

    def turn_feedback(self) -> Optional[str]:
        """Collect and clear the formatters' notes for the next turn."""
        notes = []
        for formatter in self._formatters:
            get_feedback = getattr(formatter, "get_turn_feedback", None)
            if get_feedback is None:
                continue
            note = get_feedback()
            if note:
                notes.append(note)
        return "\n\n".join(notes) or None

    def format(self, text: str) -> str:
        """Run a complete text through the chain as a single turn."""
        self.reset()
        return self.feed(text) + self.finish()
