from setuptools import setup, find_packages

# Check if PyGObject (gi) is already available system-wide
# This prevents pip from trying to build PyGObject from source when it's
# already installed via system package manager (apt, pacman, etc.)
_HAS_PYGOBJECT = False
try:
    import gi
    gi.require_version('GLib', '2.0')
    from gi.repository import GLib
    _HAS_PYGOBJECT = True
except (ImportError, ValueError, AttributeError):
    _HAS_PYGOBJECT = False

# Base requirements - always needed
install_requires = [
    "dbus-python>=1.2.0",
    "PyYAML>=6.0",
    "pytest>=8.0.0",
    "xmltodict>=0.14.2",
]

# PyGObject runs the GLib main loop that delivers daemon signals in the CLI
# watch / monitor modes.  If not system-installed, add it to install_requires
if not _HAS_PYGOBJECT:
    install_requires.append("PyGObject>=3.48.0")
    _pygobject_extras = {
        "monitor": [],  # No-op since it's already in install_requires
    }
else:
    _pygobject_extras = {
        "monitor": ["PyGObject>=3.48.0"],  # Optional for pip users
    }

setup(
    name="kdeconnect",
    version="1.0.0",
    description="Event-driven Python client for the KDE Connect daemon's D-Bus API",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=install_requires,
    extras_require=dict(_pygobject_extras, test=["pytest>=8.0.0"]),
    entry_points={
        'console_scripts': [
            'kdeconnect=kdeconnect.cli:main',
        ],
    },
    python_requires='>=3.8',
)
