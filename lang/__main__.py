"""
Lets `python -m lang program.lang` work the same as the `lang` command.
"""
from .cmdline import main

main()
