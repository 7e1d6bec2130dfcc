import setuptools
import codecs
import os.path


# See https://packaging.python.org/guides/single-sourcing-package-version/
def read(rel_path):
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r') as fp:
        return fp.read()


def get_version(rel_path):
    for line in read(rel_path).splitlines():
        if line.startswith('__version__'):
            delim = '"' if '"' in line else "'"
            return line.split(delim)[1]
    else:
        raise RuntimeError("Unable to find version string.")


def read_requirements(rel_path):
    return [
        line.strip()
        for line in read(rel_path).splitlines()
        if line.strip() and not line.startswith('#')
    ]


setuptools.setup(
    name='jointable',
    version=get_version('src/jointable/__init__.py'),
    description='Join table backed many-to-many associations for SQLAlchemy',
    long_description=read('README.md'),
    long_description_content_type='text/markdown',
    entry_points='''
    [console_scripts]
    jointable=jointable.cli:jointablecli
    ''',
    package_dir={'': 'src'},
    packages=setuptools.find_packages(where='src'),
    classifiers=[
        'Programming Language :: Python :: 3',
        ],
    python_requires='>=3.9, <4',
    install_requires=read_requirements('requirements.txt'),
    extras_require={"dev": read_requirements('requirements-dev.txt')}
)
