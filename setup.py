"""
Setup script for learnmatch.

learnmatch is an e-learning and mentorship service:

1. Module catalog - admin-curated learning modules
2. Generated quizzes - deterministic multiple-choice quizzes per module
3. Progress tracking - completion sets and percentage progress
4. Mentorship - opportunities, atomic accept-to-match, requests

The 'learnmatch' command is the CLI entry point; the API is served by
uvicorn (``learnmatch serve`` or ``python main.py``).
"""

from setuptools import find_packages, setup

setup(
    name="learnmatch",
    version="1.0.0",
    description="E-learning catalog with generated quizzes and mentor/learner matching",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="LearnMatch",
    packages=find_packages(include=["learnmatch", "learnmatch.*"]),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        # API
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Database
        "sqlalchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # HTTP (FastAPI TestClient)
        "httpx>=0.25.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "learnmatch=learnmatch.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning quiz mentorship education fastapi",
)
