"""CLI Commands"""

import os
import sys

from autocommit.config import Config, DEFAULT_KEYS, VALID_BORDERS, load_config, save_config, get_config_path
from autocommit.output import bold, dim, info, print_success


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .autocommitrc found)")

    env_mode = os.environ.get('AUTOCOMMIT_MODE')
    if env_mode:
        print(f"  {dim('Environment overrides:')}")
        print(f"    AUTOCOMMIT_MODE={env_mode}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    mode:               {info(config.mode)}")
    print(f"    show_notifications: {info(str(config.show_notifications).lower())}")
    print(f"    max_subject_length: {info(str(config.max_subject_length))}")
    print(f"    border:             {info(config.border)}")
    print(f"    size:               {info(f'{config.width:.0%} x {config.height:.0%}')}")
    print(f"    preview_width:      {info(f'{config.preview_width:.0%}')}")
    print(f"    message_height:     {info(str(config.message_height))}")

    print(f"\n  {bold('Keys:')}")
    for action, key in config.keys.items():
        print(f"    {action + ':':<19} {info(key)}")

    print(f"\n  {dim('Config locations:')}")
    print("    Local:  .autocommitrc (in current directory)")
    print("    Global: ~/.autocommitrc")
    print(f"\n  {dim('Run')} autocommit --setup {dim('to configure')}\n")

    return 0


def run_setup() -> int:
    """Quick setup wizard."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    print("Workflow mode:\n")
    print("  1. staged - commit whatever is staged, stage/unstage with a key (default)")
    print("  2. select - mark files to commit, they are staged at commit time\n")

    mode = "staged"
    while True:
        choice = input("Select [1/2] (Enter for default): ").strip()
        if choice == '' or choice == '1':
            mode = 'staged'
            break
        elif choice == '2':
            mode = 'select'
            break

    borders = sorted(VALID_BORDERS)
    print(f"\nPanel border ({', '.join(borders)}) [round]: ", end='')
    border = input().strip() or 'round'
    if border not in VALID_BORDERS:
        print(dim(f"  Unknown border '{border}', using round"))
        border = 'round'

    print("\nShow info notifications? [Y/n]: ", end='')
    show_notifications = input().strip().lower() != 'n'

    print("\nMax subject line length (Enter for 50): ", end='')
    max_len_input = input().strip()
    max_subject_length = int(max_len_input) if max_len_input.isdigit() and int(max_len_input) > 0 else 50

    config = Config(
        mode=mode,
        border=border,
        show_notifications=show_notifications,
        max_subject_length=max_subject_length,
        keys=dict(DEFAULT_KEYS),
    )
    path = save_config(config, global_config=True)

    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    commands = ('git-commit-ui', 'autocommit', 'autocommit-dry')
    register = f'eval "$(register-python-argcomplete {" ".join(commands)})"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell:
        rc_file = os.path.expanduser('~/.zshrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {register}\n")
        print(f"Then run: {dim('source ~/.zshrc')}")
    elif 'bash' in shell:
        rc_file = os.path.expanduser('~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {register}\n")
        print(f"Then run: {dim('source ~/.bashrc')}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        for command in commands:
            print(f"  register-python-argcomplete --shell powershell {command} | Out-String | Invoke-Expression")
        print("\nTo make it permanent, add the same lines to your $PROFILE")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {register}\n")
        print(f"  {dim('# Fish')}")
        for command in commands:
            print(f"  register-python-argcomplete --shell fish {command} | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
