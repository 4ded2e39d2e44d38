CASE_HELP_TEXT = (
    "Name and extension comparison:\n"
    "  --case-sensitive : 'Photo.JPG' and 'photo.jpg' are different files\n"
    "  --ignore-case    : 'Photo.JPG' and 'photo.jpg' may be duplicates\n"
    "Default: ignore case on Windows and macOS, case-sensitive elsewhere"
)

MATCH_RULES_TEXT = (
    "Files are duplicates when they have the same size and either the same name,\n"
    "or the same extension and names that differ only by a copy suffix:\n"
    "  'name (1)', 'name(1)', 'name - Copy', 'name - Copy(1)', 'name_1', 'name_copy', 'name_copy1'\n"
    "The most recently modified file of each group is kept."
)

MENU_TEXT = (
    "\nWhat do you want to do?\n"
    "  [1] Preview deletion\n"
    "  [2] Delete duplicates (keep newest file of each group)\n"
    "  [3] Exit\n"
)

EPILOG_TEXT = """
Examples:
  Preview duplicates in your OneDrive folder (auto-detected)
  %(prog)s

  Preview duplicates in Downloads, documents only
  %(prog)s -i ~/Downloads -x .docx .xlsx .pdf

  Same as above + delete duplicates (with confirmation prompt)
  %(prog)s -i ~/Downloads -x .docx .xlsx .pdf --delete

  Same as above but without confirmation and with a log file (for scripts)
  %(prog)s -i ~/Downloads -x .docx .xlsx .pdf --delete --force -l ~/keepone.log

  Choose what to do from a menu after scanning
  %(prog)s -i ~/Downloads --menu
"""
