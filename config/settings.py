TEMPLATE_FILE = "Sunday Template.pptx"
EXTENSION = "pptx"             # extension of the per-Sunday copies
TEMPLATE_DIR = "."             # where the template and the TODO files/shortcuts live
OUTPUT_DIR = "."               # shortcut mode: root of the per-Sunday YYYYMMDD folders

# Work on next week's files: the default month is the month a week from today
LEAD_DAYS = 7

TODO_SUFFIX = " TODO"
SHORTCUT_EXT = ".lnk"
SHORTCUT_DESCRIPTION = "Sunday {stamp}"

# Portable stand-in for C:\Users\<name>\OneDrive on synced machines
ONEDRIVE_PLACEHOLDER = "%OneDriveConsumer%"
