import os
from setuptools import find_packages, setup


PKG_NAME = 'renn'

VERSION_MAJOR = 0
VERSION_MINOR = 0
VERSION_MICRO = 1
VERSION = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_MICRO}"


def write_version():
    with open(os.path.join(PKG_NAME, '_version.py'), 'w') as f:
        f.write(f'version = "{VERSION}"')


if __name__ == '__main__':
    write_version()

    setup(
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Science/Research',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: MIT License',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering',
            'Topic :: Scientific/Engineering :: Artificial Intelligence',
            'Operating System :: OS Independent',
        ],
        description=('Real estate price estimation with a from-scratch '
                     'neural network'),
        install_requires=[
            'h5py',
            'matplotlib',
            'numpy',
            'scikit_learn',
            'scipy',
        ],
        extras_require={
            'test': ['pytest'],
        },
        license='MIT',
        name=PKG_NAME,
        packages=find_packages(include=[PKG_NAME, PKG_NAME + '.*']),
        python_requires='>=3.8',
        version=VERSION,
    )
