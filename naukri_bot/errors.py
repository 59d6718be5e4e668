class NaukriBotError(Exception):
    """Base class for errors raised by the bot itself (driver errors are not wrapped)."""


class ConfigError(NaukriBotError):
    """Run configuration is invalid."""


class ListingNotFoundError(NaukriBotError):
    """A candidate's fingerprint no longer matches any element on the live page."""

    def __init__(self, candidate):
        self.candidate = candidate
        super().__init__(f"Could not find the job element to click ({candidate.describe()})")
