from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union
import re
from .sentence import prettify, prettify_module

DEFAULT_DOCTEST_PATTERN = r"\(line \d+\)"

# test <identifier> ... <status>[, reason | <timing>]
_RESULT_LINE = re.compile(r"^test (?P<identifier>.+?) \.\.\. (?P<status>\S+?)(?:,.*|\s.*)?$")

class Status(Enum):
    PASSED = "ok"
    FAILED = "FAILED"
    IGNORED = "ignored"

@dataclass(frozen=True)
class TestResult:
    __test__ = False
    identifier: str
    status: Status

    @property
    def module(self) -> Optional[str]:
        if "::" not in self.identifier:
            return None
        return prettify_module(self.identifier.rsplit("::", 1)[0])

    @property
    def sentence(self) -> str:
        return prettify(self.identifier)

@dataclass(frozen=True)
class PassThrough:
    text: str

@dataclass(frozen=True)
class DocTest:
    identifier: str

Classified = Union[TestResult, PassThrough, DocTest]
DocTestFilter = Callable[[str], bool]

def doctest_filter(pattern: str = DEFAULT_DOCTEST_PATTERN) -> DocTestFilter:
    rx = re.compile(pattern)
    return lambda identifier: rx.search(identifier) is not None

_default_filter = doctest_filter()

def classify(line: str, is_doctest: DocTestFilter = _default_filter) -> Classified:
    """Anything that is not a well-formed result line comes back as PassThrough."""
    m = _RESULT_LINE.match(line)
    if not m:
        return PassThrough(line)
    identifier = m.group("identifier")
    try:
        status = Status(m.group("status"))
    except ValueError:
        return PassThrough(line)
    if is_doctest(identifier):
        return DocTest(identifier)
    return TestResult(identifier=identifier, status=status)

def parse_line(line: str, is_doctest: DocTestFilter = _default_filter) -> Optional[TestResult]:
    c = classify(line, is_doctest)
    return c if isinstance(c, TestResult) else None
