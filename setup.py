# -*- coding: utf-8 -*-

'''setup.py - Oct 2026

This sets up the package.

'''
__version__ = '1.0.0'

from setuptools import setup


def readme():
    with open('README.md') as f:
        return f.read()


INSTALL_REQUIRES = [
    'numpy>=1.17.0',
    'scipy>=1.0.0',
    'tqdm',
]

EXTRAS_REQUIRE = {
    # for the test suite: astropy provides the reference periodogram
    'test':[
        'pytest',
        'astropy>=4.0',
    ],
}


##############################
## RUN SETUP FOR TIMESCALES ##
##############################

# run setup.
setup(
    name='timescales',
    version=__version__,
    description=('Periodograms, autocorrelation functions and '
                 'variability timescales for irregularly sampled '
                 'astronomical light curves.'),
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Astronomy",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3",
    ],
    keywords='astronomy time-series periodogram autocorrelation',
    license='MIT',
    packages=[
        'timescales',
        'timescales.periodbase',
        'timescales.varbase',
    ],
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.7"
)
