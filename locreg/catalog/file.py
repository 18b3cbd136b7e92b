# $Id$
#
# Translation catalog files: common behaviour for all on-disk formats
#

import logging
import os

import dateutil.parser

import locreg.conf as conf
from . import plural

logger = logging.getLogger(__name__)

# gettext separator between message context and original string
CONTEXT_SEPARATOR = '\x04'

# parse states
UNPARSED = 'unparsed'
PARSED = 'parsed'
FAILED = 'failed'


class FormatError(Exception):
  pass


def entry_key(original, context=None):
  """Compute the catalog lookup key for an original string."""
  if context:
    return context + CONTEXT_SEPARATOR + original
  return original


class TranslationFile(object):
  """One catalog file, parsed on first use.

  Subclasses implement parse() and serialize() for their format;
  file access, error bookkeeping and plural handling live here.
  """
  filetype = None

  def __init__(self, path, context='read'):
    self.path = path
    self._headers = {}
    self._entries = {}
    # entry key -> full original, for plural entries whose format keeps it
    self._originals = {}
    self._plural_forms = None
    self._state = UNPARSED
    self._error = None

    if context == 'write':
      if os.path.exists(path):
        if not os.access(path, os.W_OK):
          self._error = 'File is not writable'
      elif not os.access(os.path.dirname(path) or os.curdir, os.W_OK):
        self._error = 'Directory not writable'
    elif not os.access(path, os.R_OK):
      self._error = 'File not readable'

  def __repr__(self):
    return '<%s %s>' % (self.__class__.__name__, self.path)

  @property
  def parsed(self):
    return self._state != UNPARSED

  def _ensure_parsed(self):
    if self._state != UNPARSED:
      return
    if self._error is not None:
      self._state = FAILED
      return
    try:
      with open(self.path, 'rb') as f:
        data = f.read()
    except OSError as e:
      logger.warning("Cannot read %s: %s", self.path, e)
      self._error = 'File not readable'
      self._state = FAILED
      return
    try:
      self._headers, self._entries = self.parse(data)
    except FormatError as e:
      logger.warning("Cannot parse %s: %s", self.path, e.args[0])
      self._error = e.args[0]
      self._state = FAILED
      return
    self._state = PARSED
    logger.debug("Parsed %s: %d entries", self.path, len(self._entries))

  def parse(self, data):
    """Decode file contents, return (headers, entries)."""
    raise FormatError('Format not supported.')

  def serialize(self, headers, entries, originals=None):
    """Encode headers and entries to file contents.

    originals maps entry keys to full plural originals
    ("singular\\0plural"), for formats that store them.
    """
    raise FormatError('Format not supported.')

  def headers(self):
    self._ensure_parsed()
    return self._headers

  def entries(self):
    self._ensure_parsed()
    return self._entries

  def error(self):
    return self._error

  def get_file(self):
    return self.path

  def translate(self, text):
    """Return the translation(s) for a lookup key, None if absent."""
    self._ensure_parsed()
    return self._entries.get(text)

  def get_plural_form(self, number):
    """Return the plural form index for a count."""
    self._ensure_parsed()
    if self._plural_forms is None:
      header = self._headers.get('plural-forms')
      if header:
        self._plural_forms = self.make_plural_form_function(header)
      else:
        self._plural_forms = plural.PluralForms(conf.DEFAULT_PLURAL_FORMS)
    return self._plural_forms(number)

  def make_plural_form_function(self, expression):
    return plural.make_plural_form_function(expression)

  def revision_date(self):
    """PO-Revision-Date header as a datetime, None if missing or bad."""
    self._ensure_parsed()
    value = self._headers.get('po-revision-date')
    if not value:
      return None
    try:
      return dateutil.parser.parse(value)
    except (ValueError, OverflowError):
      logger.debug("Bad PO-Revision-Date in %s: %r", self.path, value)
      return None

  def create_file(self, headers, entries, originals=None):
    """Write headers and entries to this file in its own format."""
    if self._error is not None:
      return False
    try:
      data = self.serialize(headers, entries, originals)
    except FormatError as e:
      self._error = e.args[0]
      return False
    try:
      with open(self.path, 'wb') as f:
        f.write(data)
    except OSError as e:
      logger.warning("Cannot write %s: %s", self.path, e)
      self._error = 'File is not writable'
      return False
    logger.debug("Wrote %s: %d entries", self.path, len(entries))
    return True

  def export(self, destination):
    """Export translations to another catalog file.

    The destination's error, if any, is copied back onto this file.
    """
    if destination.error() is not None:
      return False
    self._ensure_parsed()
    if self._error is not None:
      return False
    destination.create_file(self._headers, self._entries, self._originals)
    self._error = destination.error()
    return self._error is None


def create(path, context='read', filetype=None):
  """Create a catalog file object for path, None for unknown formats.

  The format is taken from filetype if given, else from the extension.
  """
  from .jed import JedFile
  from .literal import LiteralFile
  from .mo import MOFile

  if not filetype:
    filetype = os.path.splitext(path)[1][1:]
  cls = {'mo': MOFile,
         'py': LiteralFile,
         'json': JedFile}.get(filetype.lower())
  if cls is None:
    return None
  return cls(path, context)
