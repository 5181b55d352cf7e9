from typing import Optional, Sequence


class ValidationError(Exception):
    """Raised when an overlay configuration cannot be compiled."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        column_number: Optional[int] = None,
        overlay_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.column_number = column_number
        self.overlay_index = overlay_index

    def __str__(self):
        if self.line_number is not None:
            return f"Validation Error: {self.message} (Line: {self.line_number}, Column: {self.column_number})"
        if self.overlay_index is not None:
            return f"Validation Error: {self.message} (text overlay {self.overlay_index + 1})"
        return f"Validation Error: {self.message}"


class InvalidTimingError(ValidationError):
    """start_time is not strictly before end_time."""


class InvalidFontSizeError(ValidationError):
    """font_size is zero or negative."""


class UnresolvableFontError(ValidationError):
    """The font resolver does not know the identifier or its file is missing."""

    def __init__(
        self,
        message: str,
        available: Sequence[str] = (),
        overlay_index: Optional[int] = None,
    ):
        super().__init__(message, overlay_index=overlay_index)
        self.available = list(available)


class PipelineError(Exception):
    """Raised when probing or rendering fails."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"Pipeline Error: {self.message}"


class UnresolvableDimensionsError(PipelineError):
    """The probe could not report a width and height for the input video."""


class RenderingEngineError(PipelineError):
    """ffmpeg exited with a non-zero status."""

    def __init__(self, message: str, returncode: int, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self):
        return f"Pipeline Error: {self.message} (exit code {self.returncode})"


class UnknownEffectError(Exception):
    """Lookup of an animation effect identifier failed."""

    def __init__(self, effect_type: str, available: Sequence[str] = ()):
        self.effect_type = effect_type
        self.available = list(available)
        super().__init__(
            f'Effect "{effect_type}" not found. Available effects: {", ".join(self.available)}'
        )


class DependencyError(Exception):
    """ffmpeg or ffprobe is missing from the environment."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"Dependency Error: {self.message}"
