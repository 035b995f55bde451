"""
romdat - ROM catalog (DAT) format codecs

Parses plain-text DAT catalog formats (AttractMode, hashfiles, MAME
listroms, Everdrive SMDB, RomCenter) into normalized items and writes
them back out, with a shared attribute filter and running statistics.
"""

__version__ = "0.7.0"
__author__ = "jbruns"
