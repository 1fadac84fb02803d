from setuptools import setup, find_packages
import codecs
import os

here = os.path.abspath(os.path.dirname(__file__))

with codecs.open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
    long_description = "\n" + fh.read()

VERSION = '0.1.0'
DESCRIPTION = 'Pattern roller STL generator'
LONG_DESCRIPTION = 'Turns an image into a binary STL of a cylindrical embossing roller.'

# Setting up
setup(
    name="rollermesh",
    version=VERSION,
    description=DESCRIPTION,
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=['numpy', 'Pillow>=9.1'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['rollermesh=rollermesh.cli:main']},
    keywords=['python', 'stl', 'mesh', 'roller', 'embossing', '3d printing'],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "Programming Language :: Python :: 3",
        "Operating System :: Unix",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ]
)
