#

import os

# textdomain used when a caller does not name one
DEFAULT_TEXTDOMAIN = os.getenv('LOCREG_TEXTDOMAIN') or 'default'
# initial active locale of a new registry
DEFAULT_LOCALE = os.getenv('LOCREG_LOCALE') or 'en_US'

# English-like pluralization, used when a catalog has no usable
# Plural-Forms header
DEFAULT_PLURAL_FORMS = 'n != 1'

# Limits on Plural-Forms expressions read from catalog headers
MAX_PLURAL_EXPRESSION = 1000
MAX_PLURAL_DEPTH = 50

# MO file magic number, as read in the file's own byte order
MO_MAGIC = 0x950412de
# MO file format revisions we know how to read
MO_REVISION = 0
