"""
Console report of the t-test results.
"""
from spaanalysis.analysis.pipeline import AnalysisResult
from spaanalysis.analysis.statistics import TTestResult

# Subject used in the decision sentence of each comparison
SUBJECTS = {
    "material": "materials",
    "side": "sides",
}


def format_decision(test: TTestResult) -> str:
    subject = SUBJECTS.get(test.label, test.label)
    if test.significant:
        return f"-> Significant difference in RMSD between {subject}."
    return f"-> No significant difference in RMSD between {subject}."


def format_ttest_report(result: AnalysisResult) -> str:
    material = result.material_test
    side = result.side_test
    lines = [
        "",
        "T-test Results:",
        "---------------------------",
        f"Material groups ({material.group_a} vs {material.group_b}): p = {material.p_value:.4f}",
        format_decision(material),
        "",
        f"Sides (Positive Y vs Negative Y): p = {side.p_value:.4f}",
        format_decision(side),
    ]
    return "\n".join(lines)
