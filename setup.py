import sys

from setuptools import setup

sys.path.insert(0, 'ddc_brightness_control')
from _version import __author__, __version__  # noqa: E402

setup(
    name='ddc_brightness_control',
    version=__version__,
    license='MIT',
    author=__author__,
    packages=['ddc_brightness_control'],
    install_requires=[],
    extras_require={
        'test': ['pytest', 'pytest-mock']
    },
    entry_points={
        'console_scripts': ['ddc-brightness=ddc_brightness_control.__main__:main']
    },
    description='Step the brightness of an external monitor up and down over DDC/CI',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3 :: Only'
    ],
    python_requires='>=3.6'
)
