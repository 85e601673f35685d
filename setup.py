from setuptools import setup, find_packages

setup(
    name="kebab-tools",
    version="1.0.0",
    description="Rename PascalCase files to kebab-case and rewrite the imports that reference them",
    packages=find_packages(include=["apps", "apps.*", "casing", "casing.*", "common", "common.*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "rich>=13.0",
        "tqdm>=4.60",
        "argcomplete>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "kebabify = apps.cli:cli_kebabify",
            "kebab-config = common.shared.loader:cli_main",
        ],
    },
)
