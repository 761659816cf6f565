# File: services/population_service.py

import asyncio
import logging
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session

from agents.data_acquisition_agent import DataAcquisitionAgent, data_acquisition_agent
from database.models.candidate_model import VenueRank, VenueType
from services.author_aggregation_service import aggregate_authors
from services.candidate_heuristic_service import identify_candidates
from services.persistence_service import CandidateWriter
from services.pipeline_config import PipelineConfig, load_pipeline_config
from utils.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_UNIVERSITIES = ["Stanford University", "MIT"]

TEST_CANDIDATES = [
    {
        "name": "Dr. Test Candidate One",
        "email": "test1@stanford.edu",
        "university": "Stanford University",
        "department": "Computer Science",
        "graduation_year": 2024,
        "years_experience": 3,
        "phd_university": "Stanford University",
        "phd_graduation_year": 2024,
        "phd_department": "Computer Science",
    },
    {
        "name": "Dr. Test Candidate Two",
        "email": "test2@mit.edu",
        "university": "MIT",
        "department": "EECS",
        "graduation_year": 2025,
        "years_experience": 2,
        "phd_university": "MIT",
        "phd_graduation_year": 2025,
        "phd_department": "Electrical Engineering and Computer Science",
    },
]


def empty_results() -> Dict:
    return {
        "candidatesAdded": 0,
        "publicationsAdded": 0,
        "skillsExtracted": 0,
        "errors": [],
        "searchResults": [],
    }


# ------------------------------------------------------------
# TEST MODE
# ------------------------------------------------------------
def create_test_candidates(writer: CandidateWriter) -> int:
    """Inserts the fixed synthetic candidates, one publication each. No network."""
    logger.info("🧪 Creating test candidates...")
    added = 0

    for payload in TEST_CANDIDATES:
        if writer.find_candidate_by_email(payload["email"]):
            logger.info(f"⚠️ Test candidate {payload['name']} already exists")
            continue

        try:
            candidate = writer.insert_candidate(dict(payload))
            writer.insert_publications([{
                "candidate_id": candidate.id,
                "title": f"Test Publication by {candidate.name}",
                "conference": "NeurIPS",
                "year": 2023,
                "citations": 50,
                "venue_type": VenueType.CONFERENCE,
                "venue_rank": VenueRank.TOP_TIER,
                "source": "test",
            }])
        except PersistenceError as e:
            logger.error(f"❌ Failed to create test candidate: {e}")
            continue

        added += 1
        logger.info(f"✅ Created test candidate: {candidate.name}")

    return added


# ------------------------------------------------------------
# MAIN PIPELINE
# ------------------------------------------------------------
async def process_university(
    university: str,
    min_citations: int,
    max_candidates: int,
    writer: CandidateWriter,
    acquisition: DataAcquisitionAgent,
    config: PipelineConfig,
    results: Dict,
    written_names: Set[str],
) -> None:
    """
    Fetch → dedupe → aggregate → identify → persist for one institution.
    Per-candidate failures are recorded in results["errors"].
    """
    logger.info(f"🏫 Processing university: {university}")

    papers = await acquisition.search_university(university, min_citations, config)
    logger.info(f"📄 Found {len(papers)} papers from {university}")

    if not papers:
        logger.warning(f"⚠️ No papers found for {university}")
        results["searchResults"].append({"university": university, "papersFound": 0, "candidatesIdentified": 0})
        return

    authors = aggregate_authors(papers, config)
    decisions = identify_candidates(authors, config, limit=max_candidates)
    results["searchResults"].append({
        "university": university,
        "papersFound": len(papers),
        "candidatesIdentified": len(decisions),
    })

    to_process = decisions[:config.candidates_per_university]
    logger.info(f"👥 Processing {len(to_process)} candidates from {university}")

    for decision in to_process:
        name = decision.author.display_name
        # First occurrence in this run wins
        if name in written_names:
            logger.info(f"⚠️ Candidate {name} already handled in this run, skipping...")
            continue
        written_names.add(name)

        try:
            outcome = writer.persist_decision(decision, university)
        except PersistenceError as e:
            logger.error(f"❌ Error processing candidate {name}: {e}")
            results["errors"].append(f"Failed to process candidate: {e}")
            continue

        if outcome:
            results["candidatesAdded"] += 1
            results["publicationsAdded"] += outcome.publications_added
            results["skillsExtracted"] += outcome.skills_extracted
            logger.info(f"📊 Progress: {results['candidatesAdded']} candidates added so far")


async def run_population(
    db: Session,
    universities: Optional[List[str]] = None,
    min_citations: int = 5,
    max_candidates: int = 20,
    graduation_years: Optional[List[int]] = None,
    test_mode: bool = False,
    config: Optional[PipelineConfig] = None,
    acquisition: Optional[DataAcquisitionAgent] = None,
) -> Dict:
    """
    One population run. Always returns a structured response; a crash that
    escapes the per-unit handlers is reported as success=False.
    """
    logger.info("🚀 Starting candidate population process...")
    universities = DEFAULT_UNIVERSITIES if universities is None else universities
    graduation_years = graduation_years or [2024, 2025, 2026]

    try:
        config = config or load_pipeline_config()
        acquisition = acquisition or data_acquisition_agent
        writer = CandidateWriter(db, config)
        results = empty_results()

        logger.info(
            f"📋 Configuration: universities={len(universities)}, minCitations={min_citations}, "
            f"maxCandidates={max_candidates}, graduationYears={graduation_years}, testMode={test_mode}"
        )

        if test_mode:
            logger.info("🧪 Running in test mode...")
            added = create_test_candidates(writer)
            results["candidatesAdded"] = added
            results["publicationsAdded"] = added
            return {
                "success": True,
                "message": f"Test mode: Created {added} test candidates",
                "results": results,
            }

        selected = universities[:config.max_universities]
        written_names: Set[str] = set()

        for index, university in enumerate(selected):
            try:
                await process_university(
                    university, min_citations, max_candidates, writer, acquisition, config, results, written_names
                )
            except Exception as e:
                logger.error(f"❌ Error processing university {university}: {e}", exc_info=True)
                results["errors"].append(f"Failed to process {university}: {e}")

            if index < len(selected) - 1 and config.inter_university_delay > 0:
                await asyncio.sleep(config.inter_university_delay)

        logger.info(f"🎉 Population process completed! {results}")
        return {
            "success": True,
            "message": f"Successfully populated database with {results['candidatesAdded']} candidates",
            "results": results,
        }

    except Exception as e:
        logger.error(f"💥 Unexpected population crash: {e}", exc_info=True)
        results = empty_results()
        results["errors"] = [str(e)]
        return {
            "success": False,
            "message": "Population completed with fatal error",
            "results": results,
        }
