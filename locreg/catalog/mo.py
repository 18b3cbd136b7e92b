# $Id$
#
# GNU message catalog (.mo) files
#
# Layout, all 32-bit words in the file's byte order:
#   0  magic          0x950412de
#   4  revision       0
#   8  N              number of strings
#  12  O              offset of the originals table
#  16  T              offset of the translations table
#  20  S              size of the hash table
#  24  H              offset of the hash table
# then two tables of N (length, offset) pairs pointing to the strings.
#

import logging
import struct

import locreg.conf as conf
from .file import FormatError, TranslationFile

logger = logging.getLogger(__name__)

HEADER_SIZE = 28
RECORD_SIZE = 8


def detect_endian(data):
  """Return the struct byte order prefix matching the magic number."""
  big, = struct.unpack('>I', data[:4])
  little, = struct.unpack('<I', data[:4])
  if big == conf.MO_MAGIC:
    return '>'
  elif little == conf.MO_MAGIC:
    return '<'
  raise FormatError("Magic Marker doesn't exist")

def parse_metadata(text):
  """Parse the catalog description stored under the empty original."""
  headers = {}
  for line in text.split('\n'):
    if not line or ':' not in line:
      continue
    name, value = line.split(':', 1)
    headers[name.strip().lower()] = value.strip()
  return headers

def decode(data, originals=None):
  """Decode a .mo buffer.

  Return (headers, entries, endian). Plural entries are keyed by their
  singular original and hold a list of translated forms. If originals
  is a dict, the full "singular\\0plural" original of each plural
  entry is stored in it under the entry key.
  """
  if len(data) < 24:
    raise FormatError('Invalid Data.')
  endian = detect_endian(data)
  if len(data) < HEADER_SIZE:
    raise FormatError('Invalid Data.')

  (revision, total, originals_addr, translations_addr,
   hash_length, hash_addr) = struct.unpack(endian + '6I', data[4:HEADER_SIZE])

  if revision > conf.MO_REVISION:
    raise FormatError('Unsupported Revision.')
  datalen = len(data)
  if originals_addr > datalen or translations_addr > datalen:
    raise FormatError('Invalid Data.')

  # Table sizes are inferred from the address of what follows them.
  if translations_addr > originals_addr:
    originals_length = translations_addr - originals_addr
  else:
    originals_length = datalen - originals_addr
  if hash_addr > translations_addr:
    translations_length = min(hash_addr, datalen) - translations_addr
  else:
    translations_length = datalen - translations_addr

  count = min(total,
              originals_length // RECORD_SIZE,
              translations_length // RECORD_SIZE)
  if count < total:
    logger.debug("MO tables hold %d of %d strings", count, total)

  headers = {}
  entries = {}
  recfmt = endian + 'II'
  for i in range(count):
    try:
      olen, opos = struct.unpack_from(recfmt, data,
                                      originals_addr + i*RECORD_SIZE)
      tlen, tpos = struct.unpack_from(recfmt, data,
                                      translations_addr + i*RECORD_SIZE)
    except struct.error:
      continue
    if opos + olen > datalen or tpos + tlen > datalen:
      logger.debug("MO record %d points outside the file, skipped", i)
      continue
    original = data[opos:opos+olen]
    # some producers count the trailing NUL in the length
    translation = data[tpos:tpos+tlen].rstrip(b'\0')
    translation = translation.decode('utf-8', 'replace')

    if original == b'':
      headers.update(parse_metadata(translation))
      continue
    # plural entries: "singular\0plural" -> "form0\0form1\0..."
    full = original.decode('utf-8', 'replace')
    original = full.split('\0', 1)[0]
    if originals is not None and full != original:
      originals[original] = full
    if '\0' in translation:
      entries[original] = translation.split('\0')
    else:
      entries[original] = translation

  return headers, entries, endian

def encode(headers, entries, endian='<', originals=None):
  """Encode headers and entries to a .mo buffer, without hash table.

  originals gives the full original to write for plural entries,
  as filled in by decode().
  """
  if originals is None:
    originals = {}
  description = ''.join('%s: %s\n' % (name, value)
                        for name, value in headers.items())
  strings = [(b'', description.encode('utf-8'))]
  for original, translation in entries.items():
    if original == '':
      continue
    if isinstance(translation, (list, tuple)):
      translation = '\0'.join(translation)
    original = originals.get(original, original)
    strings.append((original.encode('utf-8'), translation.encode('utf-8')))

  count = len(strings)
  originals_addr = HEADER_SIZE
  translations_addr = originals_addr + count*RECORD_SIZE
  hash_addr = translations_addr + count*RECORD_SIZE

  recfmt = endian + 'II'
  offset = hash_addr
  otable = []
  for original, translation in strings:
    otable.append(struct.pack(recfmt, len(original), offset))
    offset += len(original) + 1
  ttable = []
  for original, translation in strings:
    ttable.append(struct.pack(recfmt, len(translation), offset))
    offset += len(translation) + 1

  header = struct.pack(endian + '7I', conf.MO_MAGIC, conf.MO_REVISION, count,
                       originals_addr, translations_addr, 0, hash_addr)
  return b''.join([header] + otable + ttable
                  + [original + b'\0' for original, translation in strings]
                  + [translation + b'\0' for original, translation in strings])


class MOFile(TranslationFile):
  filetype = 'mo'

  def __init__(self, path, context='read'):
    TranslationFile.__init__(self, path, context)
    # byte order detected when parsing, kept for writing
    self.endian = None

  def parse(self, data):
    self._originals = {}
    headers, entries, self.endian = decode(data, self._originals)
    return headers, entries

  def serialize(self, headers, entries, originals=None):
    return encode(headers, entries, self.endian or '<', originals)
