__author__ = "checkignore developers"
__description__ = (
    "Report which paths are excluded by gitignore rules, "
    "skipping paths tracked in the git index."
)
__license__ = "LGPL-2.1-only"
__url__ = "https://github.com/checkignore/checkignore"
__VERSION__ = "0.3.0"
