# ==================================================
# vt_bundle/const.py
# ==================================================
GAME_VT1 = 1
GAME_VT2 = 2
GAMES = (GAME_VT1, GAME_VT2)

SIGNATURES = {GAME_VT1: 0xF0000004,
              GAME_VT2: 0xF0000005}

HEADER_FMT = "<LLL"       # signature, unzip_size, padding (must be 0)
HEADER_SIZE = 12          # 0xC
BLOB_SIZE_FMT = "<L"      # length prefix of every blob
BLOB_SIZE_SIZE = 4

INDEX_COUNT_FMT = "<L"    # entry count at the start of the first blob
INDEX_OFFSET = 0x104      # first index record
INDEX_STRIDE = {GAME_VT1: 0x10,    # type_hash, name_hash
                GAME_VT2: 0x14}    # ... + 4 unknown bytes

TEXT_WIDTH = 256          # one byte of every dictionary slot is the terminator
TEXT_MAX = TEXT_WIDTH - 1
DUMP_FMT = "{:016x} {}\n"
