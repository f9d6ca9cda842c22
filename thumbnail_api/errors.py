class ThumbnailError(Exception):
    """Base class for failures surfaced to API clients as {"message": ...}."""

    status_code = 500


class InvalidOption(ThumbnailError):
    status_code = 400


class InvalidStyle(InvalidOption):
    def __init__(self, style):
        super().__init__(f"Invalid style: {style!r}")
        self.style = style


class InvalidColorScheme(InvalidOption):
    def __init__(self, color_scheme):
        super().__init__(f"Invalid color scheme: {color_scheme!r}")
        self.color_scheme = color_scheme


class InvalidAspectRatio(InvalidOption):
    def __init__(self, aspect_ratio):
        super().__init__(f"Invalid aspect ratio: {aspect_ratio!r}")
        self.aspect_ratio = aspect_ratio


class GenerationError(ThumbnailError):
    pass


class NoContent(GenerationError):
    def __init__(self, message="Gemini returned no content parts"):
        super().__init__(message)


class NoImageData(GenerationError):
    def __init__(self, message="Gemini did not return image data"):
        super().__init__(message)


class UploadError(ThumbnailError):
    pass


class NotFound(ThumbnailError):
    status_code = 404

    def __init__(self, message="Thumbnail not found"):
        super().__init__(message)


# Not raised by the owner-scoped routes, which report a foreign id as NotFound.
class Forbidden(ThumbnailError):
    status_code = 403

    def __init__(self, message="Not allowed to access this thumbnail"):
        super().__init__(message)


class NotAuthenticated(ThumbnailError):
    status_code = 401

    def __init__(self, message="Not authenticated"):
        super().__init__(message)
