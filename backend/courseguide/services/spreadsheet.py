from __future__ import annotations

import logging
import zipfile
from io import BytesIO

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from courseguide.core.exceptions import SheetEmptyError

logger = logging.getLogger(__name__)

RawSheet = list[list[object]]


def read_first_sheet(data: bytes | None) -> RawSheet:
    """Return every row of the first worksheet, header included."""
    if not data:
        raise SheetEmptyError("No spreadsheet has been uploaded for this revision")
    try:
        workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        logger.warning("Unreadable spreadsheet upload: %s", exc)
        raise SheetEmptyError("Uploaded file is not a readable spreadsheet") from exc

    try:
        if not workbook.worksheets:
            raise SheetEmptyError()
        sheet = workbook.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()
