"""
Content-root selection by text density and symbol density.

Every node of the normalized body is scored; the highest-scoring element is
taken as the article body.

                 Ti - LTi
    TDi   = ---------------      text density
                TGi - LTGi

                 Ti - LTi
    SbDi  = ---------------      symbol density
                 Sbi + 1

    score = TDi * log10(Pi + 2) * ln(SbDi)

Ti is the character count of node i, LTi the character count of its links,
TGi its descendant tag count, LTGi its anchor count, Pi its paragraph count
and Sbi the number of punctuation glyphs in its text.
"""
import math
import statistics
from typing import List, Optional, Sequence

import structlog

from tsdextractor.config import ExtractorConfig
from tsdextractor.errors import NoCandidateError
from tsdextractor.models.density import NodeInfo, TextDensity
from tsdextractor.parser.html_parser import (
    collapse_whitespace,
    descendant_elements,
    get_text,
    is_text_node,
    iter_nodes,
    node_name,
)

# Set up structured logger
logger = structlog.get_logger()

# CJK and Latin sentence punctuation
PUNCTUATION = frozenset('！，。？、；：“”‘’《》%（）,.?:;\'"!%()')

# Tags that only count towards TGi when they carry text
TEXT_ONLY_TAGS = ("p", "span")

# Characters per paragraph above which an all-anchor node still counts as prose
PARAGRAPH_RATIO_THRESHOLD = 10


def content_extract(body, config: Optional[ExtractorConfig] = None) -> NodeInfo:
    """
    Score every node under ``body`` and return the best candidate.

    Args:
        body: The normalized <body> element
        config: Extractor configuration (debug and std toggles)

    Returns:
        NodeInfo: The highest-scoring element node

    Raises:
        NoCandidateError: If no element in the tree carries visible text
    """
    config = config or ExtractorConfig()

    infos: List[NodeInfo] = []
    for node in iter_nodes(body):
        density = calc_text_density(node)
        infos.append(NodeInfo(
            density=density,
            node=node,
            sbdi=calc_sbdi(density),
            paragraph_tag_count=density.pi,
        ))

    std = calc_density_std(infos) if config.compute_density_std else None
    calc_score(infos)

    candidates = [
        info for info in infos
        if not is_text_node(info.node) and info.density.ti_text
    ]
    if not candidates:
        raise NoCandidateError(visited=len(infos))

    # sorted() is stable: equal scores keep document order
    candidates = sorted(candidates, key=lambda info: info.score, reverse=True)

    if config.debug:
        log_candidates(candidates, std)

    best = candidates[0]
    logger.debug(
        "Selected content node",
        tag=node_name(best.node),
        score=best.score,
        candidates=len(candidates),
        visited=len(infos),
    )
    return best


def get_all_ti_text(node) -> List[str]:
    """Collect the collapsed, non-empty text of every text node under ``node``."""
    result = []
    for child in iter_nodes(node):
        if is_text_node(child):
            text = collapse_whitespace(str(child))
            if text:
                result.append(text)
    return result


def get_all_lti_text(node) -> List[str]:
    """Collect the collapsed, non-empty text of every anchor under ``node``."""
    anchors = [node] if node_name(node) == "a" else []
    anchors.extend(descendant_elements(node, "a"))

    result = []
    for anchor in anchors:
        text = collapse_whitespace(get_text(anchor))
        if text:
            result.append(text)
    return result


def count_tags(node) -> int:
    """Count descendant elements, skipping ``p``/``span`` without text."""
    count = 0
    for element in descendant_elements(node):
        if node_name(element) in TEXT_ONLY_TAGS and len(get_text(element)) == 0:
            continue
        count += 1
    return count


def count_text_tags(node) -> int:
    """Count descendant <p> elements."""
    return len(descendant_elements(node, "p"))


def needs_link_tag_reset(ti: int, pi: int) -> bool:
    """True when there are more than the threshold characters per paragraph."""
    if pi == 0:
        return False
    return ti // pi > PARAGRAPH_RATIO_THRESHOLD


def calc_text_density(node) -> TextDensity:
    """
    Compute the text statistics and text density of one node.

    When every descendant tag is an anchor the ratio is undefined: such a
    node scores zero unless it has paragraphs and more than
    ``PARAGRAPH_RATIO_THRESHOLD`` characters per paragraph, in which case its
    anchors are ignored. A node without <p> descendants never qualifies.
    """
    ti_text = "\n".join(get_all_ti_text(node))
    ti = len(ti_text)
    lti = len("\n".join(get_all_lti_text(node)))
    tgi = count_tags(node)
    ltgi = len(descendant_elements(node, "a"))
    pi = count_text_tags(node)

    stats = dict(ti_text=ti_text, ti=ti - lti, lti=lti, tgi=tgi, ltgi=ltgi, pi=pi)

    if tgi - ltgi == 0:
        if not needs_link_tag_reset(ti, pi):
            return TextDensity(density=0.0, **stats)
        ltgi = 0
        if tgi == 0:
            # No tags at all: the ratio is undefined, treat as contentless
            return TextDensity(density=0.0, **stats)

    density = abs((ti - lti) / (tgi - ltgi))
    return TextDensity(density=density, **stats)


def count_punctuation(text: str) -> int:
    """Count punctuation glyphs in ``text``."""
    return sum(1 for char in text if char in PUNCTUATION)


def calc_sbdi(density: TextDensity) -> float:
    """Compute symbol density; an exact zero is coerced to 1."""
    sbi = count_punctuation(density.ti_text)
    sbdi = (density.ti - density.lti) / (sbi + 1)
    if sbdi == 0:
        sbdi = 1.0
    return float(sbdi)


def calc_density_std(infos: Sequence[NodeInfo]) -> float:
    """Population standard deviation of every node's text density."""
    densities = [info.density.density for info in infos]
    if not densities:
        return 0.0
    return statistics.pstdev(densities)


def node_score(info: NodeInfo) -> float:
    """Score one node; undefined or infinite results clamp to 0."""
    if info.sbdi <= 0:
        return 0.0
    score = (
        info.density.density
        * math.log10(info.paragraph_tag_count + 2)
        * math.log(info.sbdi)
    )
    if math.isnan(score) or math.isinf(score):
        return 0.0
    return score


def calc_score(infos: Sequence[NodeInfo]) -> None:
    """Assign a score to every node."""
    for info in infos:
        info.score = node_score(info)


def log_candidates(candidates: Sequence[NodeInfo], std: Optional[float]) -> None:
    """Log every candidate with its intermediate statistics."""
    logger.info("Density debug begin", candidates=len(candidates), density_std=std)
    for info in candidates:
        logger.info(
            "Density candidate",
            tag=node_name(info.node),
            score=info.score,
            density=info.density.density,
            ti=info.density.ti,
            lti=info.density.lti,
            tgi=info.density.tgi,
            ltgi=info.density.ltgi,
            sbdi=info.sbdi,
            tags=info.paragraph_tag_count,
            ti_text=info.density.ti_text,
        )
    logger.info("Density debug end")
