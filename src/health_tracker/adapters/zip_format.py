"""Record layouts of the store-only ZIP container format.

All integers are little-endian. Only the "store" method is produced or read.
"""

import struct

LOCAL_FILE_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

VERSION = 20
METHOD_STORE = 0

# signature, version needed, flags, method, mod time, mod date, crc,
# compressed size, uncompressed size, name length, extra length
LOCAL_FILE_HEADER = struct.Struct("<IHHHHHIIIHH")

# signature, version made by, version needed, flags, method, mod time,
# mod date, crc, compressed size, uncompressed size, name length,
# extra length, comment length, disk start, internal attrs, external attrs,
# local header offset
CENTRAL_DIRECTORY_HEADER = struct.Struct("<IHHHHHHIIIHHHHHII")

# signature, disk number, central directory disk, entries on disk,
# total entries, central directory size, central directory offset,
# comment length
END_OF_CENTRAL_DIRECTORY = struct.Struct("<IHHHHIIH")

SIGNATURE = struct.Struct("<I")
