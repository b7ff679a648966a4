from dedup.core.filter import FILE_TYPE_EXTENSIONS
from dedup.core.hasher import HASH_ALGORITHMS

HASH_CHOICES = list(HASH_ALGORITHMS.keys())

FILE_TYPE_HELP_TEXT = (
    "Comma separated file types:\n"
    + "".join(
        f"  {name:<10}: {' '.join(exts)}\n" for name, exts in FILE_TYPE_EXTENSIONS.items()
    )
    + "  .ext      : any literal extension, e.g. .iso\n"
    "If neither --include nor --exclude is set, all files are scanned."
)

POLICY_HELP_TEXT = (
    "Remove which file when duplication happens (comma separated, in priority order):\n"
    "  longname   : Remove the file with the longer file name\n"
    "  shortname  : Remove the file with the shorter file name\n"
    "  longpath   : Remove the file with the longer full path\n"
    "  shortpath  : Remove the file with the shorter full path\n"
    "  new        : Remove the file with the newer modification time\n"
    "  old        : Remove the file with the older modification time\n"
    "Missing categories are appended in default order. Default: longname,longpath,new"
)

HASH_HELP_TEXT = (
    "Content digest algorithm:\n"
    "  sha256     : SHA-256 (default)\n"
    "  xxh128     : xxHash 128-bit, much faster, not cryptographic\n"
    "Each algorithm keeps its own fingerprint cache."
)

EPILOG_TEXT = """
Examples:
  Show duplicated files in two folders without deleting anything
  %(prog)s -l ~/Photos /mnt/backup/Photos

  Remove duplicated photos, asking before each group
  %(prog)s -i photo ~/Photos /mnt/backup/Photos

  Keep the oldest copy, remove the rest without asking (for scripts)
  %(prog)s -f -p old ~/Downloads

  Same as above but delete permanently instead of moving to trash
  %(prog)s -f -p old --permanent ~/Downloads

Fingerprints are cached in ~/.dedup, so repeated runs over unchanged trees are fast.
"""
