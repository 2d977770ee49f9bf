# Run as `pip install .[cython]` and then
# `RANGEMAP_CYTHONIZE=1 python3 setup.py build_ext --inplace` to compile.
import os
from glob import glob
from setuptools import setup

ext_modules = []
if os.environ.get('RANGEMAP_CYTHONIZE'):
    from Cython.Build import cythonize
    os.environ['CFLAGS'] = '-O3'
    ext_modules = cythonize(
        [
            fn for fn in glob('rangemap/*.py')
            if '_test.py' not in fn and '__init__' not in fn
        ],
        compiler_directives={'language_level': "3"},
    )

setup(
    name='rangemap',
    version='0.1.0',
    description='Stabbing queries on static sets of half-open intervals.',
    packages=['rangemap'],
    python_requires='>=3.8',
    install_requires=['numpy', 'sortedcontainers'],
    extras_require={
        'test': ['pytest'],
        'cython': ['Cython'],
    },
    ext_modules=ext_modules,
)
