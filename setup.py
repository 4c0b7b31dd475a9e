# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- CONFIG & VALIDATION ---
    "pydantic>=2.0.0",
    "pyyaml>=6.0.0",
    "python-dotenv>=1.0.0",
]

tests_require = [
    # --- TESTS---
    "pytest-asyncio==1.3.0",
    "pytest",
]

setup(
    name="appshell",
    version="1.0.0",
    description="AppShell|Lifecycle and navigation core for multi-host client apps",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": tests_require},
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "appshell = appshell.main:main",
        ],
    },
)
