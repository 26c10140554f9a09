from bookbinder.builders.base import BaseBuilder, BuildResult
from bookbinder.builders.epub import EpubBuilder

BUILDERS = {
    "epub": EpubBuilder,
}
