import pytest

from courseplanner import CoursePlanner, DataLoader
from courseplanner.data import Catalog
from courseplanner.engines import CourseMatcher, CourseNormalizer, ExtractionPipeline, RequirementsEngine


@pytest.fixture(scope="session")
def loader():
    return DataLoader()


@pytest.fixture(scope="session")
def catalog(loader):
    return Catalog.from_loader(loader)


@pytest.fixture(scope="session")
def normalizer(catalog):
    return CourseNormalizer(catalog)


@pytest.fixture(scope="session")
def matcher(catalog):
    return CourseMatcher(catalog)


@pytest.fixture(scope="session")
def pipeline(catalog, normalizer, matcher):
    return ExtractionPipeline(catalog, normalizer, matcher)


@pytest.fixture(scope="session")
def requirements_engine(loader):
    return RequirementsEngine(loader)


@pytest.fixture
def planner(loader):
    return CoursePlanner(loader)


@pytest.fixture
def course(catalog):
    """Build a ResolvedCourse from a catalog name."""
    from courseplanner.models import ResolvedCourse

    def make(name, year=None):
        return ResolvedCourse.from_catalog(catalog.get(name), year=year)

    return make
