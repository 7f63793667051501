"""
Skill Extractor - Pulls a normalized skill set out of free-form document text.

Four stages feed one accumulating set:
1. Topical regular expressions (languages, frameworks, cloud, tooling, ...)
2. A reference list of common skills matched as substrings
3. Comma/slash separated lists inside parentheses
4. Phrases such as "proficient in X, Y" or "skills: X, Y"

The result is de-duplicated case-insensitively (first spelling seen wins)
and sorted.
"""

from types import MappingProxyType
import logging
import re


def _group(*alternatives: str) -> re.Pattern:
    return re.compile(
        r"(?<!\w)(?:" + "|".join(alternatives) + r")(?![\w+#])",
        re.IGNORECASE,
    )


class SkillExtractor:
    """Extracts skill tokens from text."""

    # Topical patterns, applied in order
    SKILL_PATTERNS = (
        _group(r"JavaScript", r"TypeScript", r"Python", r"Java", r"C\+\+", r"C#", r"Go",
               r"Rust", r"Swift", r"Kotlin", r"PHP", r"Ruby", r"Scala", r"R", r"MATLAB"),
        _group(r"React", r"Vue", r"Angular", r"Svelte", r"Next\.js", r"Nuxt\.js", r"Express",
               r"FastAPI", r"Django", r"Flask", r"Spring", r"Laravel", r"Rails"),
        _group(r"HTML", r"CSS", r"SQL", r"NoSQL", r"GraphQL", r"REST", r"SOAP", r"JSON",
               r"XML", r"YAML", r"Markdown"),
        _group(r"MySQL", r"PostgreSQL", r"MongoDB", r"Redis", r"Cassandra", r"Elasticsearch",
               r"Oracle", r"SQL Server", r"SQLite"),
        _group(r"AWS Lambda", r"AWS", r"Azure Functions", r"Azure", r"GCP", r"Google Cloud",
               r"EC2", r"S3", r"Google Functions"),
        _group(r"Docker", r"Kubernetes", r"K8s", r"Jenkins", r"GitLab CI", r"GitHub Actions",
               r"Travis CI", r"CircleCI"),
        _group(r"Git", r"SVN", r"Mercurial", r"Bitbucket", r"GitHub", r"GitLab", r"SourceTree"),
        _group(r"Agile", r"Scrum", r"Kanban", r"Waterfall", r"Lean", r"SAFe", r"XP", r"TDD", r"BDD"),
        _group(r"Machine Learning", r"Deep Learning", r"AI", r"Data Science", r"Analytics",
               r"NLP", r"Computer Vision"),
        _group(r"TensorFlow", r"PyTorch", r"Keras", r"Scikit-learn", r"Pandas", r"NumPy",
               r"Jupyter", r"RStudio"),
        _group(r"Project Management", r"Product Management", r"Team Leadership",
               r"Stakeholder Management"),
        _group(r"Communication", r"Presentation", r"Public Speaking", r"Negotiation", r"Facilitation"),
        _group(r"Problem Solving", r"Critical Thinking", r"Analytical Skills", r"Research",
               r"Decision Making"),
        _group(r"DevOps", r"Site Reliability", r"Microservices", r"Serverless", r"Cloud Native",
               r"Infrastructure"),
        _group(r"Linux", r"Windows", r"MacOS", r"Unix", r"Bash", r"PowerShell", r"Command Line",
               r"Terminal"),
        _group(r"Network", r"TCP/IP", r"HTTPS", r"HTTP", r"DNS", r"Firewall", r"VPN", r"Load Balancer"),
        _group(r"Security", r"Cryptography", r"Penetration Testing", r"Vulnerability Assessment",
               r"Compliance"),
        _group(r"Testing", r"QA", r"Quality Assurance", r"Unit Testing", r"Integration Testing",
               r"E2E Testing", r"Automation"),
        _group(r"Jest", r"Mocha", r"Chai", r"Cypress", r"Selenium", r"Playwright", r"Testing Library"),
        _group(r"Webpack", r"Vite", r"Parcel", r"Rollup", r"Babel", r"ESLint", r"Prettier",
               r"npm", r"yarn", r"pnpm"),
        _group(r"UI", r"UX", r"User Interface", r"User Experience", r"Design", r"Figma",
               r"Sketch", r"Adobe XD", r"Photoshop"),
        _group(r"Bootstrap", r"Tailwind", r"Material UI", r"Ant Design", r"Chakra UI", r"Bulma",
               r"Foundation"),
        _group(r"Salesforce", r"HubSpot", r"Marketo", r"Mailchimp", r"Google Analytics",
               r"Adobe Analytics"),
        _group(r"SAP", r"Oracle", r"NetSuite", r"QuickBooks", r"Xero", r"FreshBooks", r"Wave"),
    )

    # Reference list, matched as lowercase substrings of the text
    COMMON_SKILLS = (
        "JavaScript", "TypeScript", "React", "Vue.js", "Angular", "Node.js", "Python", "Java",
        "C++", "C#", "HTML", "CSS", "SQL", "MongoDB", "PostgreSQL", "MySQL", "Redis", "Docker",
        "Kubernetes", "AWS", "Azure", "Google Cloud", "Git", "CI/CD", "Agile", "Scrum",
        "REST API", "GraphQL", "Microservices", "Machine Learning", "AI", "Data Science",
        "TensorFlow", "PyTorch", "Data Analysis", "Statistics", "Project Management",
        "Leadership", "Communication", "Problem Solving", "Team Work", "Critical Thinking",
        "DevOps", "Linux", "Windows", "MacOS", "Bash", "PowerShell", "Network", "Security",
        "Testing", "Unit Testing", "Integration Testing", "E2E Testing", "Jest", "Cypress",
        "Selenium", "Webpack", "Vite", "Express.js", "FastAPI", "Django", "Spring Boot",
        "Laravel", "Ruby on Rails", "PHP", "Go", "Rust", "Swift", "Kotlin", "Flutter",
        "React Native", "UI/UX", "Figma", "Adobe XD", "Sketch", "Photoshop",
    )

    NORMALIZATIONS = MappingProxyType({
        "js": "JavaScript",
        "ts": "TypeScript",
        "node": "Node.js",
        "reactjs": "React",
        "react.js": "React",
        "vuejs": "Vue.js",
        "angularjs": "Angular",
        "ml": "Machine Learning",
        "ai": "AI",
        "aws": "AWS",
        "gcp": "Google Cloud",
        "ci/cd": "CI/CD",
        "cicd": "CI/CD",
        "ui/ux": "UI/UX",
        "ux": "UX",
        "ui": "UI",
    })

    EXCLUDED_WORDS = frozenset({
        "and", "or", "the", "in", "on", "at", "to", "for", "of", "with", "by", "as", "is", "are",
        "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did", "will",
        "would", "could", "should", "may", "might", "can", "must", "shall", "experience", "years",
        "year", "months", "month", "including", "such", "etc", "various", "multiple", "different",
        "several", "many", "strong", "excellent", "good", "solid", "deep", "extensive",
        "hands-on", "practical",
    })

    PARENTHESES_PATTERN = re.compile(r"\(([^)]+)\)")
    LIST_SEPARATORS = re.compile(r"[,;&/]")

    # The captured list runs to a sentence-ending period, a semicolon or a line break
    CONTEXT_PATTERNS = (
        re.compile(
            r"(?:experienced|skilled|proficient|expert|knowledge|familiar)\s+(?:in|with|of)\s+"
            r"((?:[^.;\n]|\.(?=\S))+)",
            re.IGNORECASE,
        ),
        re.compile(
            r"(?:experience|skills?|competencies|abilit(?:y|ies))(?:\s*:\s*|\s+includes?\s+)"
            r"((?:[^.;\n]|\.(?=\S))+)",
            re.IGNORECASE,
        ),
    )

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def extract_skills(self, text: str) -> list[str]:
        """
        Extract a sorted, case-insensitively unique list of skills from text.

        Args:
            text: Text of a job description or CV

        Returns:
            Sorted list of skill names, empty for blank text
        """
        if not text or not text.strip():
            return []

        skills: dict[str, str] = {}

        def add(skill: str) -> None:
            skills.setdefault(skill.lower(), skill)

        # Pattern stage
        for pattern in self.SKILL_PATTERNS:
            for match in pattern.finditer(text):
                skill = self.normalize_skill_name(match.group(0))
                if self.is_valid_skill(skill):
                    add(skill)

        # Reference list stage
        text_lower = text.lower()
        for skill in self.COMMON_SKILLS:
            if skill.lower() in text_lower:
                add(skill)

        # Parenthesized lists
        for group in self.PARENTHESES_PATTERN.findall(text):
            for piece in self._split_list(group):
                if self.is_valid_skill(piece) and len(piece) > 1:
                    add(piece)

        # "proficient in ...", "skills: ..."
        for pattern in self.CONTEXT_PATTERNS:
            for match in pattern.finditer(text):
                for piece in self._split_list(match.group(1)):
                    skill = self.normalize_skill_name(piece)
                    if self.is_valid_skill(skill) and len(skill) > 1:
                        add(skill)

        result = sorted(skills.values())
        self.logger.debug(f"Extracted {len(result)} skills from {len(text)} chars")
        return result

    def normalize_skill_name(self, skill: str) -> str:
        """Map common abbreviations to their canonical name."""
        return self.NORMALIZATIONS.get(skill.lower(), skill)

    def is_valid_skill(self, skill: str) -> bool:
        """Reject stop words, bare numbers and fragments without letters."""
        if len(skill) < 2:
            return False
        if skill.lower().strip() in self.EXCLUDED_WORDS:
            return False
        if not re.search(r"[a-zA-Z]", skill):
            return False
        if skill.isdigit():
            return False
        return True

    def _split_list(self, value: str) -> list[str]:
        return [piece.strip() for piece in self.LIST_SEPARATORS.split(value) if piece.strip()]


_default_extractor = SkillExtractor()


def extract_skills(text: str) -> list[str]:
    """Extract skills from text using a shared default extractor."""
    return _default_extractor.extract_skills(text)
