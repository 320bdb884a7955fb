from setuptools import setup, find_packages

setup(
    name="mailbreeze",
    version="0.1.0",
    author="MailBreeze",
    description="Async Python SDK for the MailBreeze email platform API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/mailbreeze/mailbreeze-python",
    packages=find_packages(include=['mailbreeze', 'mailbreeze.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: AsyncIO",
    ],
    python_requires='>=3.9',
    install_requires=[
        "httpx",
        "pydantic>=2",
        "tenacity",
        "structlog",
        "aiolimiter",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
