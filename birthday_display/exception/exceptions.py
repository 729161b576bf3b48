class BirthdayDisplayError(Exception):
    """Base error for the birthday display"""


class RecordFileNotFoundError(BirthdayDisplayError):
    """The birthday file does not exist"""

    def __init__(self, path: str):
        super().__init__(f"Birthday file not found: {path}")
        self.path = path


class RecordFileUnreadableError(BirthdayDisplayError):
    """The birthday file exists but cannot be opened or decoded"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read birthday file {path}: {reason}")
        self.path = path
        self.reason = reason


class ImageFetchError(BirthdayDisplayError):
    """A portrait image could not be downloaded"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch image {url}: {reason}")
        self.url = url
        self.reason = reason
