"""
Application Initialization
==========================
This module constructs the application and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the session state (SessionState).
2. Instantiates the Main Window (View), passing the session into it.
3. Kicks off the background dataset load once the window is up.
"""
import sys

from scatterexplorer.app.application import create_app
from scatterexplorer.logging_config import setup_logging_from_env
from scatterexplorer.model.state import SessionState
from scatterexplorer.view.main_window import MainWindow


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    setup_logging_from_env()

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the session and the Main Window (sample data is drawn immediately)
    session = SessionState()
    window = MainWindow(session)
    window.show()

    # 4. Replace the sample with the real dataset when it arrives
    window.start_loading()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
