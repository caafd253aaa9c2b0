"""
Setup script for trivia-session package with optional Cython compilation.

This builds the internal state managers (_core, _session) as compiled
extensions, while keeping the public API (session.py, host.py, config.py,
errors.py, questions.py) as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Check if Cython is available
try:
    from Cython.Build import cythonize
    USE_CYTHON = True
except ImportError:
    USE_CYTHON = False
    print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/trivia_session/_core/roster.py",
    "src/trivia_session/_core/scoreboard.py",
    "src/trivia_session/_core/timeouts.py",
    "src/trivia_session/_core/timer_backends.py",
    "src/trivia_session/_core/devices.py",
    "src/trivia_session/_session/state_machine.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # src/trivia_session/_core/roster.py -> trivia_session._core.roster
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is available."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


# Only add ext_modules if we have Cython
ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="trivia-session",
    version="1.0.0",
    description="In-memory state core for a multiplayer trivia minigame",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "cython>=3.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "trivia_session": ["*.so", "*.pyd", "demo_data/*.json"],
        "trivia_session._store": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "trivia-session=trivia_session.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
