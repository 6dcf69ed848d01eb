class ScanError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(ScanError):
    """Raised before any check runs when the submitted URL is unusable."""


class ProbeError(ScanError):
    pass


class ProbeTimeout(ProbeError):
    pass


class ProbeNetworkError(ProbeError):
    def __init__(self, message: str, code: str = 'CONNECTION'):
        super().__init__(message)
        self.code = code


class ProbeParseError(ProbeError):
    pass


class ProbeCatastrophic(ProbeError):
    """A check implementation raised something other than a ProbeError."""

    def __init__(self, check_name: str, original: BaseException):
        super().__init__(f'{check_name} crashed: {original!r}')
        self.check_name = check_name
        self.original = original
