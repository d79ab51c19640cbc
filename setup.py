"""Setup script for the assignment capture tool."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="assignment-capture",
    version="0.1.0",
    author="Assignment Capture",
    description="Capture assignments and due dates from learning management system web pages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "beautifulsoup4>=4.9.0",
        "dateparser>=1.2.0",
        "icalendar>=5.0.0",
        "pytz>=2023.3",
        "requests>=2.28.0",
        "flask>=2.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "assignment-capture=assignment_capture.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Topic :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
