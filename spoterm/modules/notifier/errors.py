class UnsupportedEnvironmentError(Exception):
    """The metadata endpoint could not be reached at all.

    Almost always means the process is not running on an EC2 instance.
    """
    pass

class ProbeError(Exception):
    pass

class ResponseStatusError(ProbeError):
    def __init__(self, status: int):
        self.status = status
        super().__init__(f"response error {status}")
