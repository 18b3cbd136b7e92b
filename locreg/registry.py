# $Id$
#
# Registry of loaded translation catalogs, by textdomain and locale
#

import logging
import os

import locreg.conf as conf
import locreg.catalog.file as catalogfile

logger = logging.getLogger(__name__)


class Registry(object):
  """Loaded catalogs, grouped by (textdomain, locale).

  For each key, catalogs are kept in load order; lookups scan them
  from the most recently loaded one down.
  Not thread-safe: serialize access to a shared registry externally.
  """
  def __init__(self, locale=None):
    self.locale = locale or conf.DEFAULT_LOCALE
    # (textdomain, locale) -> [TranslationFile, ...] in load order
    self._translations = {}
    # real path -> locale -> textdomain -> TranslationFile
    self._files = {}

  def set_locale(self, locale):
    self.locale = locale

  def get_locale(self):
    return self.locale

  def _catalogs(self, textdomain, locale):
    if locale is None:
      locale = self.locale
    return self._translations.get((textdomain, locale), [])

  def _shared_file(self, path, locale):
    """Return a file already loaded for locale under another textdomain."""
    for moe in self._files.get(path, {}).get(locale, {}).values():
      return moe
    return None

  def _forget(self, path, textdomain, locale):
    bylocale = self._files.get(path)
    if bylocale is None:
      return
    bydomain = bylocale.get(locale, {})
    bydomain.pop(textdomain, None)
    if not bydomain:
      bylocale.pop(locale, None)
    if not bylocale:
      del self._files[path]

  def load(self, path, textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    """Load a catalog file for textdomain and locale.

    Return False if the file cannot be used, True otherwise,
    including when it was already loaded for this textdomain and locale.
    """
    if locale is None:
      locale = self.locale
    path = os.path.realpath(path)
    key = (textdomain, locale)

    for moe in self._translations.get(key, []):
      if moe.get_file() == path:
        return True

    moe = self._shared_file(path, locale)
    if moe is None:
      moe = catalogfile.create(path)
      if moe is None:
        logger.debug("Unknown catalog format: %s", path)
        return False
      if moe.error() is not None:
        logger.debug("Cannot load %s: %s", path, moe.error())
        return False

    self._translations.setdefault(key, []).append(moe)
    self._files.setdefault(path, {}).setdefault(locale, {})[textdomain] = moe
    logger.debug("Loaded %s for %s/%s", path, textdomain, locale)
    return True

  def unload(self, textdomain, path=None, locale=None):
    """Unload one catalog file, or all of them if path is None."""
    if locale is None:
      locale = self.locale
    key = (textdomain, locale)
    if key not in self._translations:
      return False

    if path is None:
      for moe in self._translations.pop(key):
        self._forget(moe.get_file(), textdomain, locale)
      logger.debug("Unloaded %s/%s", textdomain, locale)
      return True

    path = os.path.realpath(path)
    catalogs = self._translations[key]
    for i, moe in enumerate(catalogs):
      if moe.get_file() == path:
        del catalogs[i]
        if not catalogs:
          del self._translations[key]
        self._forget(path, textdomain, locale)
        logger.debug("Unloaded %s for %s/%s", path, textdomain, locale)
        return True
    return False

  def is_loaded(self, textdomain, locale=None):
    return len(self._catalogs(textdomain, locale)) > 0

  def _locate(self, original, context, textdomain, locale):
    """Find the first catalog holding the entry, newest first.

    Empty translations do not count and do not hide older catalogs.

    Return (file, translations) or (None, None).
    """
    key = catalogfile.entry_key(original, context)
    for moe in reversed(self._catalogs(textdomain, locale)):
      translation = moe.translate(key)
      if translation:
        return moe, translation
    return None, None

  def translate(self, original, context=None,
                textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    """Translate a string; None if no loaded catalog has it.

    For a plural entry the singular translation is returned.
    """
    moe, translation = self._locate(original, context, textdomain, locale)
    if moe is None:
      return None
    if isinstance(translation, list):
      return translation[0] if translation else None
    return translation

  def translate_plural(self, plurals, number, context=None,
                       textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    """Translate a plural string for a count; None if not found.

    plurals holds the original forms, plurals[0] being the singular.
    """
    if not plurals:
      return None
    moe, translation = self._locate(plurals[0], context, textdomain, locale)
    if moe is None:
      return None
    if not isinstance(translation, list):
      translation = [translation]
    if not translation:
      return None
    index = moe.get_plural_form(number)
    index = max(0, min(index, len(translation) - 1))
    return translation[index]

  def has_translation(self, original, context=None,
                      textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    moe, translation = self._locate(original, context, textdomain, locale)
    return moe is not None

  def get_headers(self, textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    """Headers of all catalogs for the key, later files winning."""
    headers = {}
    for moe in self._catalogs(textdomain, locale):
      headers.update(moe.headers())
    return headers

  def get_entries(self, textdomain=conf.DEFAULT_TEXTDOMAIN, locale=None):
    """Entries of all catalogs for the key, later files winning."""
    entries = {}
    for moe in self._catalogs(textdomain, locale):
      entries.update(moe.entries())
    return entries


_instance = None

def instance():
  """Return the process-wide shared registry."""
  global _instance
  if _instance is None:
    _instance = Registry()
  return _instance
