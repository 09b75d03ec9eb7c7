from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()


# Read requirements from requirements.txt
def read_requirements(filename):
    with open(os.path.join(this_directory, filename)) as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="folder-organizer",
    version="1.0.0",
    author="Folder Organizer Team",
    description="Sort the loose files and folders of a directory into category folders by file type",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: System :: Filesystems",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": [
            "pytest>=8.1.1",
            "pytest-mock>=3.12.0",
        ],
        "dev": [
            "pytest>=8.1.1",
            "pytest-mock>=3.12.0",
            "black>=24.3.0",
            "flake8>=7.0.0",
            "mypy>=1.9.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "folder-organizer=folder_organizer.app:main",
            "folder-organizer-preview=folder_organizer.file_access.__main__:scan",
        ],
    },
    keywords="file organization folders extensions cleanup downloads automation",
)
