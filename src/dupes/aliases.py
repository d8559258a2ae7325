from dupes.core.hasher import ALGORITHMS

ALGORITHM_CHOICES = list(ALGORITHMS.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash used to compare files:\n"
    "  sha256     : Cryptographic, safe on any tree (default)\n"
    "  xxhash     : Much faster, not collision-resistant against crafted files\n"
)

PROMPT_TEXT = "Remove dupes? [Y/n or index of file to keep]: "

EPILOG_TEXT = """
Examples:
  List duplicate files under Downloads without touching anything
  %(prog)s -d ~/Downloads --find-only

  Decide interactively which copy of each duplicate group to keep
  %(prog)s -d ~/Downloads

  Skip dotfiles and files of 1GB or more, move removed copies to the trash
  %(prog)s -d ~/Pictures --ignore-dotfiles -M 1GB --trash

At each prompt:
  Enter / y / yes : keep [0], the first file found
  a number        : keep the file with that index
  anything else   : leave the group untouched

Defaults can be set in ~/.dupes.toml or with DUPES_* environment variables.
"""
