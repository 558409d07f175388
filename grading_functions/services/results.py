"""
Tagged extraction results.

Extractors return either an ``Extracted`` transcript or a ``Degraded``
placeholder. Both carry the text that ends up in ``extracted_text``; the
tag lets callers tell a real transcript from a best-effort marker without
sniffing the string.
"""


class ExtractionResult:
    degraded = False
    reason = None

    def __init__(self, text):
        self.text = text

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.text == other.text
            and self.reason == other.reason
        )

    def __repr__(self):
        preview = self.text[:40]
        if self.degraded:
            return f"{type(self).__name__}({preview!r}, reason={self.reason!r})"
        return f"{type(self).__name__}({preview!r})"


class Extracted(ExtractionResult):
    """Text actually read from the file."""


class Degraded(ExtractionResult):
    """Placeholder text produced by a fallback path."""

    degraded = True

    def __init__(self, text, reason):
        super().__init__(text)
        self.reason = reason

    def with_text(self, text):
        return Degraded(text, self.reason)


class ExtractionOutcome:
    """What an orchestrator run produced for one record."""

    def __init__(self, record_id, file_name, category, result):
        self.record_id = record_id
        self.file_name = file_name
        self.category = category
        self.result = result

    @property
    def text(self):
        return self.result.text

    @property
    def degraded(self):
        return self.result.degraded
