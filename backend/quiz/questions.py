from __future__ import annotations

from dataclasses import dataclass

from .models import NO_BUDGET_LIMIT


@dataclass(frozen=True)
class QuizOption:
    value: str | int
    label: str
    description: str


@dataclass(frozen=True)
class QuizQuestion:
    id: str
    title: str
    subtitle: str
    options: tuple[QuizOption, ...]
    multiple: bool = False

    def option_value(self, value: str | float | None) -> str | int | None:
        """Return the canonical option value matching *value*, or ``None``."""
        for option in self.options:
            if option.value == value or str(option.value) == str(value):
                return option.value
        return None


QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        id="primary_use",
        title="What will you primarily use CAD software for?",
        subtitle="Select your main use case",
        options=(
            QuizOption("mechanical", "Mechanical Design & Engineering", "Parts, assemblies, product design"),
            QuizOption("architectural", "Architecture & Construction", "Buildings, floor plans, structures"),
            QuizOption("3dprinting", "3D Printing & Prototyping", "Models for 3D printing, rapid prototyping"),
            QuizOption("industrial", "Industrial Design", "Consumer products, aesthetics, ergonomics"),
            QuizOption("jewelry", "Jewelry Design", "Rings, pendants, custom jewelry"),
            QuizOption("electronics", "Electronics & PCB Design", "Circuit boards, electronic enclosures"),
            QuizOption("animation", "3D Animation & Modeling", "Characters, scenes, visual effects"),
            QuizOption("any", "General Purpose", "Multiple use cases"),
        ),
    ),
    QuizQuestion(
        id="experience",
        title="What is your experience level with CAD software?",
        subtitle="This helps us recommend appropriate complexity",
        options=(
            QuizOption("beginner", "Beginner", "New to CAD, need user-friendly interface"),
            QuizOption("intermediate", "Intermediate", "Some CAD experience, comfortable with learning"),
            QuizOption("advanced", "Advanced", "Experienced user, need powerful features"),
            QuizOption("professional", "Professional", "Industry expert, need enterprise features"),
        ),
    ),
    QuizQuestion(
        id="budget",
        title="What is your budget range per month?",
        subtitle="Select your preferred pricing tier",
        options=(
            QuizOption(0, "Free", "Open source or free versions only"),
            QuizOption(50, "$0 - $50/month", "Personal or small business budget"),
            QuizOption(200, "$50 - $200/month", "Professional individual license"),
            QuizOption(500, "$200 - $500/month", "Small team or advanced features"),
            QuizOption(1000, "$500 - $1000/month", "Enterprise features"),
            QuizOption(NO_BUDGET_LIMIT, "$1000+/month", "No budget constraints"),
        ),
    ),
    QuizQuestion(
        id="platform",
        title="What platform do you prefer?",
        subtitle="Choose your operating system",
        options=(
            QuizOption("windows", "Windows", "Windows 10/11"),
            QuizOption("mac", "macOS", "Mac computers"),
            QuizOption("linux", "Linux", "Linux distributions"),
            QuizOption("web", "Web Browser", "Browser-based, any platform"),
            QuizOption("any", "No Preference", "Any platform is fine"),
        ),
    ),
    QuizQuestion(
        id="features",
        title="Which features are most important to you?",
        subtitle="Select your top priorities (choose multiple)",
        multiple=True,
        options=(
            QuizOption("simulation", "Simulation & Analysis", "FEA, CFD, stress testing"),
            QuizOption("collaboration", "Team Collaboration", "Cloud sharing, version control"),
            QuizOption("rendering", "Photorealistic Rendering", "High-quality visualizations"),
            QuizOption("parametric", "Parametric Modeling", "History-based, editable features"),
            QuizOption("assembly", "Large Assembly Handling", "Complex multi-part designs"),
            QuizOption("drafting", "2D Drafting & Documentation", "Technical drawings, blueprints"),
            QuizOption("manufacturing", "Manufacturing Integration", "CAM, toolpaths, production"),
        ),
    ),
)

QUESTIONS_BY_ID: dict[str, QuizQuestion] = {q.id: q for q in QUESTIONS}
