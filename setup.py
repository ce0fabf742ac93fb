from setuptools import setup, find_packages
import os

# Read the README file for long description
readme_path = os.path.join(os.path.dirname(__file__), "README.md")
try:
    with open(readme_path, "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "ofremove - Remove a single OmniFocus task or project via AppleScript"

# Read requirements from requirements.txt
requirements_path = os.path.join(os.path.dirname(__file__), "requirements.txt")
try:
    with open(requirements_path, "r", encoding="utf-8") as f:
        requirements = []
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                # Remove inline comments
                req = line.split("#")[0].strip()
                if req:
                    requirements.append(req)
except FileNotFoundError:
    requirements = [
        "typer>=0.9.0",
        "rich>=13.5.2",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
    ]

setup(
    name="ofremove",
    version="1.0.0",
    author="OmniFocus CLI Team",
    author_email="contact@omnifocus-cli.com",
    description="Remove a single OmniFocus task or project through AppleScript automation",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["omnifocus_removal", "commands", "utils"]),
    py_modules=["ofremove"],
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Environment :: Console",
        "Natural Language :: English",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.1.3",
            "pytest-mock>=3.10.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
        ],
        "test": [
            "pytest>=7.1.3",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ofremove=ofremove:app",
        ],
    },
    keywords="omnifocus productivity task-management cli apple macos applescript automation",
    zip_safe=False,
)
