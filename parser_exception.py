class TenkiError(Exception):
    label = "Tenki Error"

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return f"{self.label}: {self.msg}"


class NetworkError(TenkiError):
    label = "Network Error"


class InvalidHtml(TenkiError):
    label = "Invalid HTML"
