"""
Learning Path Generator for creating a per-module study trajectory.
"""

from typing import List

from ...config import AdaptiveConfig
from ...models import LearningPathStep, ModuleAnalysis, PathStatus


class LearningPathGenerator:
    """
    Generates one learning path step per module from its performance analysis.
    """

    def __init__(self, config: AdaptiveConfig = None):
        self.config = config or AdaptiveConfig()

    def generate_learning_path(
        self, analyses: List[ModuleAnalysis]
    ) -> List[LearningPathStep]:
        """
        Generate the learning path in module order.

        Args:
            analyses: Module analyses, one per module

        Returns:
            List of learning path steps
        """
        return [
            self._create_step(analysis)
            for analysis in sorted(analyses, key=lambda a: a.module_id)
        ]

    def _create_step(self, analysis: ModuleAnalysis) -> LearningPathStep:
        """Pick the first status that applies to the module"""
        if analysis.completed_content == 0:
            return LearningPathStep(
                module_id=analysis.module_id,
                status=PathStatus.NOT_STARTED,
                recommendation="Start with basic content in this module",
                next_actions=[
                    "Begin with introductory content",
                    "Complete basic exercises",
                ],
            )

        if analysis.completion_rate < self.config.in_progress_completion_rate:
            return LearningPathStep(
                module_id=analysis.module_id,
                status=PathStatus.IN_PROGRESS,
                recommendation="Continue completing content",
                next_actions=["Complete remaining content", "Focus on understanding"],
            )

        if analysis.average_score < self.config.remediation_score:
            return LearningPathStep(
                module_id=analysis.module_id,
                status=PathStatus.NEEDS_REVIEW,
                recommendation="Review material and retake quizzes",
                next_actions=[
                    "Review weak areas",
                    "Retake failed quizzes",
                    "Study remedial content",
                ],
            )

        if analysis.average_score > self.config.advanced_score:
            return LearningPathStep(
                module_id=analysis.module_id,
                status=PathStatus.ADVANCED_READY,
                recommendation="Ready for advanced content",
                next_actions=["Explore advanced topics", "Try challenging exercises"],
            )

        return LearningPathStep(
            module_id=analysis.module_id,
            status=PathStatus.COMPLETED,
            recommendation="Module completed successfully",
            next_actions=["Move to next module", "Review occasionally"],
        )
