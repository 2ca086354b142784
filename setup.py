import glob
import os
from os import path
import platform

from setuptools import find_packages
from setuptools import setup

try:
    from Cython.Build import build_ext as _cy_build_ext
    from Cython.Distutils.extension import Extension as _cy_Extension

    HAS_CYTHON = True
except ImportError:
    _cy_build_ext = _cy_Extension = None
    HAS_CYTHON = False

DISABLE_EXTENSION = bool(os.environ.get('SWITCHYARD_DISABLE_CYTHON'))
IS_CPYTHON = platform.python_implementation() == 'CPython'

MYDIR = path.abspath(os.path.dirname(__file__))


def load_version():
    filename = path.join(MYDIR, 'switchyard', 'version.py')
    globals_ = {}
    with open(filename) as version_file:
        exec(version_file.read(), globals_)
    return globals_['__version__']


def load_description():
    with open(path.join(MYDIR, 'README.rst'), encoding='utf-8') as readme:
        return readme.read()


if HAS_CYTHON and IS_CPYTHON and not DISABLE_EXTENSION:
    assert _cy_Extension is not None
    assert _cy_build_ext is not None

    def list_modules(dirname, pattern):
        filenames = glob.glob(path.join(dirname, pattern))

        module_names = []
        for name in filenames:
            module, ext = path.splitext(path.basename(name))
            if module != '__init__':
                module_names.append((module, ext))

        return module_names

    package_names = [
        'switchyard.routing',
    ]

    # NOTE: Only the hot paths are compiled; the builder, inspection and
    #   CLI modules stay pure Python.
    modules_to_exclude = [
        'switchyard.routing.segments',
    ]

    cython_directives = {'language_level': '3', 'annotation_typing': False}

    ext_modules = [
        _cy_Extension(
            package + '.' + module,
            sources=[path.join(*(package.split('.') + [module + ext]))],
            cython_directives=cython_directives,
            optional=True,
        )
        for package in package_names
        for module, ext in list_modules(
            path.join(MYDIR, *package.split('.')), '*.py'
        )
        if (package + '.' + module) not in modules_to_exclude
    ]

    cmdclass = {'build_ext': _cy_build_ext}
else:
    ext_modules = []
    cmdclass = {}


setup(
    name='switchyard',
    version=load_version(),
    description=(
        'A two-way URL routing engine: match requests against path '
        'templates, and render paths back from parameters.'
    ),
    long_description=load_description(),
    long_description_content_type='text/x-rst',
    license='Apache 2.0',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries :: Application Frameworks',
    ],
    keywords='url routing router reverse-routing path templates',
    packages=find_packages(include=['switchyard', 'switchyard.*']),
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.8',
    install_requires=[],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'switchyard-inspect-table=switchyard.cmd.inspect_table:main',
        ],
    },
    cmdclass=cmdclass,
    ext_modules=ext_modules,
)
