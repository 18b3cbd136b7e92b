# $Id$
#
# JSON catalog files (.json), Jed 1.x layout:
#   {"domain": "messages",
#    "locale_data": {"messages": {"": {"plural-forms": "..."},
#                                 "original": ["translation"],
#                                 "singular": ["form0", "form1"]}}}
#

import json

from .file import FormatError, TranslationFile

DEFAULT_DOMAIN = 'messages'


class JedFile(TranslationFile):
  filetype = 'json'

  def parse(self, data):
    try:
      payload = json.loads(data.decode('utf-8'))
    except (ValueError, MemoryError, RecursionError):
      raise FormatError('Format not supported.')
    if not isinstance(payload, dict) \
       or not isinstance(payload.get('locale_data'), dict):
      raise FormatError('Format not supported.')

    locale_data = payload['locale_data']
    domain = payload.get('domain') or DEFAULT_DOMAIN
    messages = locale_data.get(domain)
    if messages is None and len(locale_data) == 1:
      messages, = locale_data.values()
    if not isinstance(messages, dict):
      raise FormatError('Format not supported.')

    meta = messages.get('')
    if not isinstance(meta, dict):
      meta = {}
    headers = {}
    for name, value in meta.items():
      if isinstance(value, str):
        name = name.lower()
        # Jed spells it with an underscore
        if name == 'plural_forms':
          name = 'plural-forms'
        headers[name] = value

    entries = {}
    for original, value in messages.items():
      if original == '':
        continue
      if isinstance(value, str):
        entries[original] = value
        continue
      if not isinstance(value, list) or not value \
         or not all(isinstance(v, str) for v in value):
        continue
      if len(value) == 1:
        entries[original] = value[0]
      else:
        entries[original] = value
    return headers, entries

  def serialize(self, headers, entries, originals=None):
    messages = {'': dict(headers)}
    for original, value in entries.items():
      if original == '':
        continue
      if isinstance(value, (list, tuple)):
        messages[original] = list(value)
      else:
        messages[original] = [value]
    payload = {'domain': DEFAULT_DOMAIN,
               'locale_data': {DEFAULT_DOMAIN: messages}}
    return (json.dumps(payload, ensure_ascii=False, indent=2)
            + '\n').encode('utf-8')
