class SiteCountsError(Exception):
    """Base error of the site_counts app."""


class BlockRegistrationError(SiteCountsError):
    pass


class BlockTypeNotFound(SiteCountsError):
    def __init__(self, name: str):
        super().__init__(f"Block type {name!r} is not registered")
        self.name = name
