# Main.py
""""" Entry point for the calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Evaluate an expression given on the command line, or
   - Load configuration and start the Qt GUI

"""""
import sys
from pathlib import Path

from Calculator import config_manager as config_manager
from Calculator import commands as commands


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "Calculator"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "MathEngine.py",
        modules_dir / "PostfixEngine.py",
        modules_dir / "Tokenizer.py",
        modules_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
        PROJECT_ROOT / "icons" / "icon.png",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error 1: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def evaluate_arguments(arguments):
    """Print the result of the expression given on the command line. Returns the exit code."""
    result = commands.invoke("calculate", {"inp": " ".join(arguments)})
    if "error" in result:
        print(f"Error {result['code']}: {result['error']}")
        return 1
    print(result["result"])
    return 0


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    if len(sys.argv) > 1:
        sys.exit(evaluate_arguments(sys.argv[1:]))

    all_settings = config_manager.load_setting_value("all")
    if all_settings.get("debug") == True:
        print("Config loaded:", all_settings)

    # Imported late so a command line evaluation does not need a display
    from Calculator import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe and len(sys.argv) == 1:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    main()
