#
# Catalog fixtures shared by the tests.
#
# .mo files are assembled here with struct directly, not with
# locreg.catalog.mo.encode(), so that decoding is checked against
# an independent writer.
#

import json
import os
import struct

MAGIC = 0x950412de

# (original, translation) pairs as stored in a .mo file
EXAMPLE_SIMPLE = [
  ('', 'PO-Revision-Date: 2016-01-05 18:45:32+1000\n'),
  ('original', 'translation'),
  ('context\x04original with context', 'translation with context'),
  ('plural0\x00plural1', 'translation0\x00translation1'),
  ('context\x04plural0 with context\x00plural1 with context',
   'translation0 with context\x00translation1 with context'),
]

SIMPLE = [
  ('baba', 'dyado'),
  ('kuku\nruku', 'yes'),
]

PLURAL = [
  ('', 'Project-Id-Version: dragons\n'
       'Plural-Forms: nplurals=2; plural=n != 1;\n'),
  ('one dragon\x00%d dragons', 'oney dragoney\x00twoey dragoney'),
]

FA_IR = [
  ('', 'Language: fa_IR\n'
       'Plural-Forms: nplurals=1; plural=0;\n'),
  ('Revisions not enabled.', 'رونوشت‌ها فعال نشدند.'),
  ('file\x04Add New', 'افزودن جدید'),
  ('%s comment\x00%s comments', '%s دیدگاه'),
]

EXAMPLE_SIMPLE_HEADERS = {'po-revision-date': '2016-01-05 18:45:32+1000'}

EXAMPLE_SIMPLE_ENTRIES = {
  'original': 'translation',
  'context\x04original with context': 'translation with context',
  'plural0': ['translation0', 'translation1'],
  'context\x04plural0 with context': ['translation0 with context',
                                      'translation1 with context'],
}


def make_mo(strings, endian='<', hash_addr=None, count_nul=False):
  """Assemble a .mo file from (original, translation) pairs.

  hash_addr: value of the hash table address field, defaults to the
  end of the translations table.
  count_nul: include the terminating NUL in translation lengths,
  as some broken producers do.
  """
  encoded = [(o.encode('utf-8'), t.encode('utf-8')) for o, t in strings]
  n = len(encoded)
  originals_addr = 28
  translations_addr = originals_addr + 8*n
  strings_addr = translations_addr + 8*n
  if hash_addr is None:
    hash_addr = strings_addr

  records = []
  offset = strings_addr
  for o, t in encoded:
    records.append((len(o), offset))
    offset += len(o) + 1
  for o, t in encoded:
    if count_nul:
      records.append((len(t) + 1, offset))
    else:
      records.append((len(t), offset))
    offset += len(t) + 1

  out = struct.pack(endian + '7I', MAGIC, 0, n,
                    originals_addr, translations_addr, 0, hash_addr)
  for length, offset in records:
    out += struct.pack(endian + 'II', length, offset)
  for o, t in encoded:
    out += o + b'\0'
  for o, t in encoded:
    out += t + b'\0'
  return out

def make_jed(headers, entries):
  messages = {'': headers}
  for k, v in entries.items():
    messages[k] = v if isinstance(v, list) else [v]
  return json.dumps({'domain': 'messages',
                     'locale_data': {'messages': messages}})

def make_literal(headers, entries):
  payload = dict(headers)
  payload['messages'] = dict(
    (k, '\0'.join(v) if isinstance(v, list) else v)
    for k, v in entries.items())
  return repr(payload)

def write(dirname, name, data):
  path = os.path.join(dirname, name)
  mode = 'wb' if isinstance(data, bytes) else 'w'
  if mode == 'wb':
    with open(path, mode) as f:
      f.write(data)
  else:
    with open(path, mode, encoding='utf-8') as f:
      f.write(data)
  return path

def write_all(dirname):
  """Write the standard fixture catalogs into dirname."""
  write(dirname, 'example-simple.mo', make_mo(EXAMPLE_SIMPLE))
  write(dirname, 'example-simple.json',
        make_jed(EXAMPLE_SIMPLE_HEADERS, EXAMPLE_SIMPLE_ENTRIES))
  write(dirname, 'example-simple.py',
        make_literal(EXAMPLE_SIMPLE_HEADERS, EXAMPLE_SIMPLE_ENTRIES))
  write(dirname, 'simple.mo', make_mo(SIMPLE))
  write(dirname, 'plural.mo', make_mo(PLURAL))
  write(dirname, 'fa_IR.mo', make_mo(FA_IR))
