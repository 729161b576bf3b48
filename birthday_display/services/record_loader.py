from pydantic import ValidationError
from birthday_display.exception.exceptions import RecordFileNotFoundError, RecordFileUnreadableError
from birthday_display.models.person_schemas import ErrorKind, LineError, LoadResult, Person
import logging

logger = logging.getLogger(__name__)

FIELD_NAMES = ("last_name", "first_name", "birthday", "gender", "image_url")
FIELD_SEPARATOR = ","

class RecordLoader:
    """
    This service is responsible for reading the birthday file and turning each line into a validated Person.
    Invalid lines are skipped and reported, they never abort the load.
    """

    # parse one line of the file
    def parse_line(self, line: str, line_number: int) -> Person | LineError:
        """ Parse a single line with the layout lastname,firstname,dd.mm.YYYY,gender,[image url]
            - missing trailing fields are treated as empty, so they fail with the error of that field
            - the first failing field in column order decides the error kind
        """
        fields = line.split(FIELD_SEPARATOR)

        if len(fields) > len(FIELD_NAMES):
            return LineError(
                line_number=line_number,
                kind=ErrorKind.MALFORMED_LINE,
                message=f"Expected at most {len(FIELD_NAMES)} fields, got {len(fields)}"
            )

        values = dict(zip(FIELD_NAMES, fields))
        for name in FIELD_NAMES[:4]:
            values.setdefault(name, "")

        try:
            return Person(**values)
        except ValidationError as e:
            first_error = e.errors()[0]
            return LineError(
                line_number=line_number,
                kind=ErrorKind(first_error["type"]),
                message=first_error["msg"]
            )

    def load(self, path: str) -> LoadResult:
        """
        Load all persons from the birthday file

        :param path: Path to the CSV file

        Raises RecordFileNotFoundError or RecordFileUnreadableError when the file itself cannot be read,
        in that case nothing is returned.
        """
        try:
            # utf-8-sig drops a byte order mark written by spreadsheet exports
            with open(path, "r", encoding="utf-8-sig") as file:
                lines = file.read().splitlines()
        except FileNotFoundError as e:
            raise RecordFileNotFoundError(path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise RecordFileUnreadableError(path, str(e)) from e

        persons = []
        errors = []

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue

            result = self.parse_line(line, line_number)
            if isinstance(result, LineError):
                logger.warning(f"Skipping line {line_number} of {path}: {result.kind.value}: {result.message}")
                errors.append(result)
            else:
                persons.append(result)

        logger.info(f"Loaded {len(persons)} persons from {path}, skipped {len(errors)} invalid lines")

        return LoadResult(persons=tuple(persons), errors=tuple(errors))
