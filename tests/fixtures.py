"""
Test Fixtures

Common test classes used across test modules
"""

from bindwire import constructor


class Widget:
    """Type with a single zero-argument constructor"""

    def __init__(self):
        self._name = None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._name = value


class Gadget:
    """Type whose only constructor needs an int"""

    def __init__(self, count: int):
        self.count = count


class Logger:
    """Test logger"""

    def __init__(self):
        self.lines = []

    def log(self, message: str):
        self.lines.append(message)


class Clock:
    """Test clock"""
    pass


class Service:
    """Type with a zero-argument and a one-argument constructor"""

    def __init__(self):
        self.logger = None
        self.created_by = "__init__"

    @constructor
    def with_logger(cls, logger: Logger) -> 'Service':
        service = cls()
        service.logger = logger
        service.created_by = "with_logger"
        return service


class Report:
    """Type with two one-argument constructors"""

    def __init__(self, logger: Logger):
        self.source = logger
        self.created_by = "__init__"

    @constructor
    def from_clock(cls, clock: Clock) -> 'Report':
        report = cls(Logger())
        report.source = clock
        report.created_by = "from_clock"
        return report


class Thing:
    """Type with an int parameter"""

    def __init__(self, x: int):
        self.x = x


class UserRepository:
    """Repository with dependencies"""

    def __init__(self, logger: Logger, clock: Clock):
        self.logger = logger
        self.clock = clock


class Settings:
    """Type with settable properties"""

    def __init__(self):
        self._host = "localhost"
        self._port = 0
        self._label = ""

    @property
    def host(self) -> str:
        return self._host

    @host.setter
    def host(self, value: str):
        self._host = value

    @property
    def port(self) -> int:
        return self._port

    @port.setter
    def port(self, value: int):
        self._port = value

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str):
        self._label = value

    @property
    def read_only(self) -> str:
        return "fixed"
