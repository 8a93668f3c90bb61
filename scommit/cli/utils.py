"""CLI Utility Functions"""

import subprocess
import sys

# Tried in order until one is installed
CLIPBOARD_COMMANDS = {
    'win32': [['clip']],
    'darwin': [['pbcopy']],
    'linux': [['xclip', '-selection', 'clipboard'], ['xsel', '--clipboard', '--input'], ['wl-copy']],
}


def copy_to_clipboard(text: str, platform: str | None = None) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    platform = platform or sys.platform
    commands = CLIPBOARD_COMMANDS.get(platform, CLIPBOARD_COMMANDS['linux'])
    data = text.encode('utf-8')

    for command in commands:
        try:
            subprocess.run(command, input=data, check=True)
            return True, ""
        except FileNotFoundError:
            continue
        except (subprocess.CalledProcessError, OSError) as e:
            return False, f"Clipboard command failed: {e}"

    if platform.startswith('linux'):
        return False, "Install xclip, xsel or wl-clipboard: sudo apt install xclip"
    return False, "No clipboard tool found"
