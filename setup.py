# setup.py
from setuptools import setup, find_packages

setup(
    name="sitefetch",
    version="0.1.0",
    description="Асинхронная загрузка сайта в markdown: обход ссылок, sitemap.xml, readability",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "readability-lxml>=0.8.1",
        "markdownify>=0.13",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "sitefetch=sitefetch.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
