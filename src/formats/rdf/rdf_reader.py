"""
RDF/XML instance data reader.

CIM instance data (network models, profiles exported by modelling tools) is
exchanged as RDF/XML. This module locates such files and loads them into an
rdflib Graph so that their content can be checked and summarized.

Usage:
    from formats.rdf.rdf_reader import RDFDataReader

    reader = RDFDataReader()
    for path in reader.find_files("./data/"):
        summary = reader.read_file(path)
        print(path.name, summary.triple_count)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

from rdflib import Graph, RDF, URIRef

from constants import FileExtensions

logger = logging.getLogger(__name__)


class RDFReadError(ValueError):
    """Raised when an RDF/XML file cannot be parsed."""


def local_name(uri: URIRef) -> str:
    """Return the fragment or last path segment of a URI."""
    text = str(uri)
    for separator in ('#', '/'):
        if separator in text:
            text = text.rsplit(separator, 1)[-1]
    return text


@dataclass
class RDFFileSummary:
    """
    Summary of one RDF/XML file.

    Attributes:
        path: The file that was read.
        triple_count: Number of triples in the file.
        subject_count: Number of distinct subjects.
        type_counts: Instances per ``rdf:type`` local name.
    """
    path: Path
    triple_count: int = 0
    subject_count: int = 0
    type_counts: Dict[str, int] = field(default_factory=dict)


class RDFDataReader:
    """Locate and parse RDF/XML instance data files."""

    def __init__(self, rdf_format: str = 'xml'):
        self.rdf_format = rdf_format

    def find_files(self, path: Union[str, Path]) -> List[Path]:
        """
        Find RDF files at a path.

        Args:
            path: A single file or a directory (searched non-recursively).

        Raises:
            FileNotFoundError: If the path doesn't exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")
        if path.is_file():
            return [path]
        return sorted(
            p for p in path.iterdir()
            if p.is_file() and p.suffix.lower() in FileExtensions.RDF_EXTENSIONS
        )

    def load_graph(self, file_path: Union[str, Path]) -> Graph:
        """
        Parse an RDF/XML file into a Graph.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            RDFReadError: If the file has invalid syntax.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        graph = Graph()
        try:
            graph.parse(str(path), format=self.rdf_format)
        except Exception as e:
            logger.error(f"Failed to parse RDF file {path}: {e}")
            raise RDFReadError(f"Invalid RDF/XML syntax in {path}: {e}")

        logger.info(f"Successfully parsed {len(graph)} triples from {path}")
        return graph

    def read_file(self, file_path: Union[str, Path]) -> RDFFileSummary:
        """Parse a file and summarize its content."""
        graph = self.load_graph(file_path)
        type_counts = Counter(
            local_name(o) for o in graph.objects(predicate=RDF.type) if isinstance(o, URIRef)
        )
        return RDFFileSummary(
            path=Path(file_path),
            triple_count=len(graph),
            subject_count=len(set(graph.subjects())),
            type_counts=dict(type_counts),
        )
