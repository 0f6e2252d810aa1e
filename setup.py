# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- CONFIG & MODELS ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- CONSOLE ---
    "rich>=13.0.0",

    # --- UTILS ---
    "httpx>=0.27.0", # Backend health check / participant creation
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest-asyncio==1.3.0",
        "pytest",
    ],
}

setup(
    name="stride",
    version="0.1.0",
    description="Stride|Session and team roster core",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"stride.shared.config": ["settings/*.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "stride=stride.app.main:main",
        ],
    },
    python_requires=">=3.12",
)
