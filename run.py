# run.py
# DESIGNER'S NOTE:
# Entry point script for running from a source checkout without installing the package.

import sys
import os


def main():
    """
    Sets up the Python path and runs the StatusDog application.
    """
    project_root = os.path.dirname(os.path.abspath(__file__))
    sys.path.insert(0, project_root)

    print("Initializing StatusDog...")

    from statusdog.main import main as run_app
    run_app()


if __name__ == "__main__":
    main()
