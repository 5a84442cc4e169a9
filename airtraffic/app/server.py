import os
import subprocess
import sys

UI_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "ui.py")


def run_dashboard(streamlit_args=None) -> int:
    """
    Launches the report dashboard under Streamlit. Extra arguments (for example
    `--server.port 8502`) are passed through to `streamlit run`.
    """
    if streamlit_args is None:
        streamlit_args = sys.argv[1:]

    print(f"Launching report dashboard from: {UI_PATH}")
    try:
        completed = subprocess.run([sys.executable, "-m", "streamlit", "run", UI_PATH, *streamlit_args])
    except FileNotFoundError:
        print(f"Error: could not start {sys.executable}")
        return 1
    if completed.returncode != 0:
        print("Error: the dashboard exited abnormally.")
        print("Please make sure Streamlit is installed correctly ('pip install streamlit').")
    return completed.returncode


if __name__ == "__main__":
    sys.exit(run_dashboard())
