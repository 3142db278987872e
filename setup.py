from setuptools import setup, find_packages

setup(
    name="hht-assistant",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    url="",
    license="",
    author="",
    author_email="",
    description="Chat assistant that answers questions with embeddable YouTube videos",
    python_requires=">=3.9",
    install_requires=[
        "click",
        "fastapi",
        "httpx",
        "pydantic>=2",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "hht_chat=hht_assistant.chat:main",
        ],
    },
)
