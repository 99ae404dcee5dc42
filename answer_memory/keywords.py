"""
KeywordSet: domain vocabulary (technologies, methodologies, skills) used to
split stored questions into a preferred pool and a fallback pool.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS = (
    # JavaScript frameworks/libraries
    "javascript", "typescript", "node.js", "react.js", "angular", "vue.js",
    # Python frameworks
    "python", "django", "flask",
    # Java frameworks
    "java", "spring", "spring boot",
    # Cloud platforms
    "aws", "azure", "google cloud", "cloud computing",
    # DevOps and containers
    "docker", "kubernetes", "containerization",
    # Databases
    "sql", "nosql", "mongodb", "postgresql", "mysql", "databases",
    # Version control
    "git", "github", "gitlab",
    # Agile
    "agile", "scrum", "kanban",
    # AI/ML and data science
    "machine learning", "deep learning", "artificial intelligence", "data science",
    # Web
    "html", "css", "sass", "bootstrap", "web development",
    # APIs and architectures
    "restful api", "graphql", "microservices", "serverless",
    # DevOps practices
    "devops", "continuous integration", "continuous deployment",
    # Software engineering
    "software engineering", "software development", "full stack",
    "cybersecurity", "network security",
    "react native", "mobile development",
    "blockchain", "ethereum", "smart contracts",
    "agile methodologies", "lean methodologies",
    "big data", "apache spark", "hadoop",
    # Programming languages
    "c++", "c", "kotlin",
    # Additional skills
    "software testing", "teamcenter", "dita xml",
)


class KeywordSet:
    """
    Case-insensitive membership test of domain terms against raw question text.

    Multi-character terms match as substrings ("java" matches "Java?"). Single
    character terms such as "c" match only as a standalone token.
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        terms = keywords if keywords is not None else DEFAULT_KEYWORDS
        self.keywords: List[str] = []
        for term in terms:
            term = str(term).strip().lower()
            if term and term not in self.keywords:
                self.keywords.append(term)
        self._substrings = [k for k in self.keywords if len(k) > 1]
        single = [k for k in self.keywords if len(k) == 1]
        self._token_re = re.compile(
            r"(?<![\w+#])(?:" + "|".join(re.escape(k) for k in single) + r")(?![\w+#])"
        ) if single else None

    def __len__(self) -> int:
        return len(self.keywords)

    def __contains__(self, term: str) -> bool:
        return term.strip().lower() in self.keywords

    def find(self, text: str) -> Optional[str]:
        """First keyword present in the text, or None."""
        if not text:
            return None
        lowered = text.lower()
        for keyword in self._substrings:
            if keyword in lowered:
                return keyword
        if self._token_re:
            match = self._token_re.search(lowered)
            if match:
                return match.group(0)
        return None

    def contains_keyword(self, text: str) -> bool:
        return self.find(text) is not None


def load_vocabulary(path: Optional[Union[str, Path]]) -> Dict[str, List[str]]:
    """
    Read keyword and prefix overrides from a YAML file.

    Expected structure::

        keywords: [python, java, ...]
        prefixes: ["how many years of work experience do you have with", ...]

    Missing keys are simply absent from the result; a missing or unreadable
    file yields an empty dict and the built-in defaults apply.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Vocabulary file {path} not found, using built-in keywords and prefixes.")
        return {}
    except yaml.YAMLError as e:
        logger.warning(f"Vocabulary file {path} is not valid YAML ({e}), using built-in defaults.")
        return {}

    vocabulary = {}
    for key in ("keywords", "prefixes"):
        values = data.get(key)
        if isinstance(values, list):
            vocabulary[key] = [str(v) for v in values]
    return vocabulary
