"""LearnMatch: e-learning modules, generated quizzes and mentor matching."""

__version__ = "1.0.0"
