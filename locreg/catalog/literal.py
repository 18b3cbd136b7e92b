# $Id$
#
# Python literal catalog files (.py)
#
# The file holds a single dict literal:
#   {'plural-forms': 'nplurals=2; plural=(n != 1);',
#    'messages': {'original': 'translation',
#                 'context\x04original': 'translation',
#                 'singular': 'form0\x00form1'}}
# It is read with ast.literal_eval() and never executed.
#

import ast
import pprint

from .file import FormatError, TranslationFile


def _forms(value):
  """Normalize a stored translation: NUL-joined plurals become a list."""
  if isinstance(value, (list, tuple)):
    if not all(isinstance(v, str) for v in value):
      return None
    return list(value)
  if not isinstance(value, str):
    return None
  if '\0' in value:
    return value.split('\0')
  return value


class LiteralFile(TranslationFile):
  filetype = 'py'

  def parse(self, data):
    try:
      payload = ast.literal_eval(data.decode('utf-8'))
    except (ValueError, SyntaxError, MemoryError, RecursionError):
      raise FormatError('Format not supported.')
    if not isinstance(payload, dict) \
       or not isinstance(payload.get('messages'), dict):
      raise FormatError('Format not supported.')

    headers = {}
    for name, value in payload.items():
      if name == 'messages':
        continue
      if isinstance(name, str) and isinstance(value, str):
        headers[name.lower()] = value

    entries = {}
    for original, value in payload['messages'].items():
      if not isinstance(original, str) or original == '':
        continue
      value = _forms(value)
      if value is not None:
        entries[original] = value
    return headers, entries

  def serialize(self, headers, entries, originals=None):
    payload = dict(headers)
    payload['messages'] = dict(
      (original,
       '\0'.join(value) if isinstance(value, (list, tuple)) else value)
      for original, value in entries.items())
    return ('# -*- coding: utf-8 -*-\n'
            + pprint.pformat(payload) + '\n').encode('utf-8')
