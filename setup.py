import setuptools
from pathlib import Path

# Read README safely
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "debuglog: local debug log sink and live viewer"

__version__ = "0.1.0"

PACKAGE_NAME = "debuglog"

setuptools.setup(
    name=PACKAGE_NAME,
    version=__version__,
    description="Append JSON debug events to a file over HTTP and tail them live in the browser",
    long_description=long_description,
    long_description_content_type="text/markdown",

    packages=setuptools.find_packages(include=["debuglog", "debuglog.*"]),

    python_requires=">=3.10",

    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "python-dotenv",
        "requests",
    ],

    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },

    entry_points={
        "console_scripts": [
            "debuglog-server=debuglog.cli:server_main",
            "debuglog-viewer=debuglog.cli:viewer_main",
            "debuglog-find-port=debuglog.cli:find_port_main",
            "debuglog-tail=debuglog.cli:tail_main",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    keywords="debug logging log-viewer fastapi localhost",
)
