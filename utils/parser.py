# utils/parser.py
from dataclasses import dataclass, asdict

from utils.errors import EmptyResponse, MalformedResponse

DELIMITER = '---'
SEGMENT_COUNT = 4


@dataclass(frozen=True)
class VerseFields:
    book: str
    chapter: str
    verse: str
    text: str

    def to_json(self):
        return asdict(self)


def parse_response(raw):
    """Split an oracle result of the form ``book---chapter---verse---text``.

    Only the first three delimiters cut; anything after the third one,
    further delimiters included, is verse text. Fields come back verbatim.
    """
    if not raw:
        raise EmptyResponse()

    segments = raw.split(DELIMITER, SEGMENT_COUNT - 1)
    if len(segments) < SEGMENT_COUNT:
        raise MalformedResponse(
            f"Expected {SEGMENT_COUNT} segments separated by '{DELIMITER}', got {len(segments)}"
        )

    book, chapter, verse, text = segments
    if not text:
        raise MalformedResponse("Oracle result is missing the verse text")
    if not (book and chapter and verse):
        raise MalformedResponse("Oracle result is missing the book, chapter or verse")

    return VerseFields(book=book, chapter=chapter, verse=verse, text=text)
