"""
Export of fetched comment records to CSV, HTML and JSON.

Each dump_* function returns an ExportedFile: the file name, its MIME type and
the text content. Nothing is written to disk here.
"""

import html
import json
from collections import namedtuple
from urllib.parse import quote

from .config import CONFIG, YOUTUBE_ORIGIN
from .dates import format_display_date, format_local_date
from .errors import EmptyInput, InvalidCharacter, UnsupportedFormat
from .resolver import create_comment_link

ExportedFile = namedtuple('ExportedFile', ['name', 'mime_type', 'content'])

DEFAULT_CSV_FIELDS = ["Comment ID", "Comment Time", "Author", "Comment", "Likes"]

# Punctuation kept literal in author profile links, alongside letters, digits and -_.~
URI_COMPONENT_SAFE = "!'()*"

HTML_PROLOGUE = (
    '<!DOCTYPE html>\n'
    '<meta charset="UTF-8">\n'
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
)


# ============================================================================
# CSV
# ============================================================================

class CsvHandler:
    """
    Minimal CSV writer with explicit control over escaping.

    A cell is quoted only if it contains the separator, the line terminator or
    the quote character; embedded quote characters are doubled. With quoting
    disabled (quote is empty or None) a cell that would need quoting raises
    InvalidCharacter instead of producing a broken file.

    Parameters:
        sep (str): Field separator
        linefeed (str): Line terminator placed between rows (not after the last one)
        quote (str or None): Quote character, or a falsy value to disable quoting
        fields (list or None): Header labels; no header row when None
    """

    def __init__(self, sep=',', linefeed='\n', quote='"', fields=None):
        self.sep = sep
        self.linefeed = linefeed
        self.quote = quote
        self.fields = fields

    def dump(self, rows):
        """Serialize a non-empty list of rows (each a sequence of cells) to CSV text."""
        if not rows:
            raise EmptyInput("Input data should be a non-empty list of rows.")

        lines = []
        if self.fields:
            lines.append(self._join(self.fields))
        lines.extend(self._join(row) for row in rows)
        return self.linefeed.join(lines)

    def _join(self, row):
        return self.sep.join(self._escape_cell(cell) for cell in row)

    def _escape_cell(self, cell):
        if cell is None:
            return ''

        cell = str(cell)

        if self.quote:
            if self.sep in cell or self.linefeed in cell or self.quote in cell:
                cell = self.quote + cell.replace(self.quote, self.quote * 2) + self.quote
        elif self.sep in cell or self.linefeed in cell:
            raise InvalidCharacter(f"Text contains invalid char: {json.dumps(cell, ensure_ascii=False)}")

        return cell


def dump_csv(comments, fields=DEFAULT_CSV_FIELDS, filename=CONFIG['filename_stem'], tz=None,
             sep=',', linefeed='\n', quote='"'):
    """
    Export comments as CSV: ID, local comment time, author, plain text and likes.

    Parameters:
        comments (list): Comment records
        fields (list or None): Header labels; pass None to omit the header row
        filename (str): File name without extension
        tz (tzinfo or None): Zone for the comment time; local zone when None
        sep, linefeed, quote: Passed to CsvHandler

    Returns:
        ExportedFile: '<filename>.csv' with type text/csv

    Raises:
        EmptyInput: If comments is empty
        InvalidCharacter: If quoting is disabled and a cell needs it
    """
    rows = [
        [
            comment['commentId'],
            format_local_date(comment['commentDate'], tz),
            comment['commentAuthor'],
            comment['commentText'],
            comment['commentLiked'],
        ]
        for comment in comments
    ]

    handler = CsvHandler(sep=sep, linefeed=linefeed, quote=quote, fields=fields)
    return ExportedFile(f"{filename}.csv", 'text/csv', handler.dump(rows))


# ============================================================================
# HTML
# ============================================================================

def _render_comment_html(comment, tz=None):
    comment_date = comment['commentDate']
    comment_updated = comment['commentUpdated']
    author = comment['commentAuthor']

    edited = ''
    if comment_updated != comment_date:
        edited = (
            f' <time datetime="{format_local_date(comment_updated, tz)}"'
            f' title="{html.escape(format_display_date(comment_updated, tz))}">(edited)</time>'
        )

    # Replies sit one blockquote deeper than the thread they follow
    opening, closing = ('<blockquote>', '</blockquote>')
    if not comment['isTopLevel']:
        opening, closing = opening * 2, closing * 2

    author_url = f"{YOUTUBE_ORIGIN}/{quote(author, safe=URI_COMPONENT_SAFE)}"
    permalink = create_comment_link(comment['videoId'], comment['commentId'])

    return (
        f'{opening}\n'
        f'  <header>\n'
        f'    <a href="{html.escape(author_url)}" target="_blank" rel="external"><b>{html.escape(author)}</b></a>\n'
        f'    <a href="{html.escape(permalink)}" target="_blank" rel="external">'
        f'<time datetime="{format_local_date(comment_date, tz)}">{html.escape(format_display_date(comment_date, tz))}</time>'
        f'{edited}</a>\n'
        f'    <span>👍{comment["commentLiked"]}</span>\n'
        f'  </header>\n'
        f'  <div>{comment["commentHtml"]}</div>\n'
        f'{closing}'
    )


def dump_html(comments, filename=CONFIG['filename_stem'], tz=None):
    """
    Export comments as a standalone HTML page, one blockquote per comment.

    The comment body is YouTube's rendered HTML and is inserted as-is.
    An empty comment list gives a page with no comment blocks.
    """
    blocks = [_render_comment_html(comment, tz) for comment in comments]
    text = HTML_PROLOGUE + '\n\n'.join(blocks)
    return ExportedFile(f"{filename}.html", 'text/html', text)


# ============================================================================
# JSON
# ============================================================================

def dump_json(comments, filename=CONFIG['filename_stem']):
    """Export the full records, pretty-printed with a 2-space indent."""
    text = json.dumps(list(comments), ensure_ascii=False, indent=2)
    return ExportedFile(f"{filename}.json", 'application/json', text)


EXPORTERS = {
    'csv': dump_csv,
    'html': dump_html,
    'json': dump_json,
}


def dump(comments, format=None, **options):
    """
    Export comments in the named format ('csv', 'html' or 'json'; CSV when None).

    Options are passed on to the matching dump_* function.

    Raises:
        UnsupportedFormat: If the format name is unknown
    """
    name = (format or 'csv').lower()
    if name not in EXPORTERS:
        raise UnsupportedFormat(f"Unsupported export format: {format}")
    return EXPORTERS[name](comments, **options)
