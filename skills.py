# skills.py
# Central, read-only "knowledge base" for skill normalization, keyword coverage
# and certification recommendations. Loaded once per process, never mutated.

from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

# Canonical spellings. Normalization maps raw tokens onto exactly one of these.
CANONICAL_SKILLS: Tuple[str, ...] = (
    # --- Languages ---
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Rust", "Swift", "Kotlin",
    "R", "MATLAB", "Perl", "Groovy", "Objective-C", "Scala", "Haskell", "Lua", "Julia", "Dart",
    "Solidity", "Assembly", "VBA", "Bash", "Shell Scripting",
    # --- Web frameworks ---
    "React", "React.js", "Vue.js", "Angular", "Svelte", "Next.js", "Nuxt.js", "Express.js", "NestJS",
    "Node.js", "Django", "Flask", "FastAPI", "Spring Boot", "ASP.NET", "Laravel", "Ruby on Rails",
    "Koa.js", "Hapi.js", "jQuery", "Three.js", "D3.js", "Chart.js",
    "Redux", "Zustand", "MobX", "Webpack", "Vite", "Parcel", "Babel", "ES6", "ESNext",
    # --- Markup & styling ---
    "HTML", "HTML5", "CSS", "CSS3", "Sass", "Less", "Tailwind CSS", "Bootstrap", "Material UI",
    # --- Data stores ---
    "SQL", "MySQL", "PostgreSQL", "MongoDB", "Redis", "Elasticsearch", "GraphQL", "Firebase",
    "Supabase", "Oracle", "SQLite", "MariaDB", "Cassandra", "CouchDB", "DynamoDB", "Neo4j",
    "InfluxDB",
    # --- Cloud & DevOps ---
    "AWS", "Azure", "Google Cloud Platform", "Docker", "Kubernetes", "Terraform", "Jenkins",
    "GitHub Actions", "Git", "Linux", "AWS EC2", "AWS S3", "AWS Lambda", "AWS RDS",
    "Azure DevOps", "Google Cloud Run", "Helm", "Ansible", "Chef", "Puppet", "Nginx",
    "Apache HTTP Server", "Prometheus", "Grafana", "ELK Stack", "CI/CD", "Serverless",
    # --- Data & ML ---
    "Machine Learning", "Deep Learning", "Data Science", "TensorFlow", "PyTorch",
    "Scikit-learn", "Pandas", "NumPy", "Apache Kafka", "Apache Spark", "Hadoop", "Airflow", "DBT",
    # --- Architecture & practices ---
    "REST API", "Microservices", "TDD", "BDD", "gRPC", "WebSockets", "SOAP",
    "Event-Driven Architecture", "Monolithic Architecture", "CQRS", "Domain-Driven Design",
    "API Gateway", "Rate Limiting", "Design Patterns", "SOLID Principles", "Clean Architecture",
    "Refactoring", "Code Review", "Version Control",
    # --- Process & tooling ---
    "Agile", "Agile Development", "Scrum", "Scrum Master", "Kanban", "Jira", "Confluence",
    "Notion", "Slack", "Trello", "Asana", "Postman", "Swagger", "OpenAPI", "Figma", "Adobe XD",
    # --- Testing ---
    "Jest", "Mocha", "Chai", "Cypress", "Playwright", "Selenium", "JUnit", "Mockito",
    "Load Testing", "Performance Testing", "Security Testing",
    # --- Mobile ---
    "React Native", "Flutter", "Xamarin", "Android", "Android Studio", "iOS", "Xcode",
    "SwiftUI", "Jetpack Compose",
)

# Extra spellings recognised when scanning free text for job-description keywords.
# The key is the canonical name, the value lists alternative ways it is written
# (case-insensitivity is handled by the matcher).
SKILL_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "JavaScript": ("JS",),
    "TypeScript": ("TS",),
    "Go": ("Golang",),
    "React": ("ReactJS",),
    "Node.js": ("NodeJS", "Node"),
    "Vue.js": ("Vue", "VueJS"),
    "Express.js": ("Express", "ExpressJS"),
    "Next.js": ("NextJS",),
    "PostgreSQL": ("Postgres",),
    "MongoDB": ("Mongo",),
    "AWS": ("Amazon Web Services",),
    "Azure": ("Microsoft Azure",),
    "Google Cloud Platform": ("GCP", "Google Cloud"),
    "Kubernetes": ("K8s",),
    "CI/CD": ("Continuous Integration", "Continuous Deployment"),
    "REST API": ("REST", "RESTful", "REST APIs", "RESTful APIs"),
    "Machine Learning": ("ML",),
    "Scikit-learn": ("sklearn",),
    "Apache Kafka": ("Kafka",),
    "Apache Spark": ("Spark", "PySpark"),
    "Tailwind CSS": ("Tailwind",),
    "Jira": ("Atlassian Jira",),
    "Ruby on Rails": ("Rails",),
    "Spring Boot": ("Spring",),
    "ASP.NET": (".NET", "dotnet"),
})

# Ubiquitous languages and frameworks. They never surface as "missing" or
# "matched" skills because nearly every technical job description lists them.
NON_CORE_SKILL_TERMS: FrozenSet[str] = frozenset({
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "rust", "swift", "kotlin",
    "r", "matlab", "perl", "groovy", "objective-c", "scala", "haskell", "lua", "julia", "dart",
    "react", "react.js", "vue.js", "angular", "svelte", "next.js", "nuxt.js", "express.js",
    "node.js", "django", "flask", "spring boot", "asp.net", "laravel", "ruby on rails",
    "fastapi", "koa.js", "hapi.js", "jquery", "three.js", "d3.js",
})

# Certification levels, used by the foundational pass.
LEVEL_FOUNDATIONAL = "foundational"
LEVEL_ASSOCIATE = "associate"
LEVEL_PROFESSIONAL = "professional"

# skill-domain -> {"certs": (...), "level": ...}
CERT_MAP: Mapping[str, Mapping[str, object]] = MappingProxyType({
    "cloud": MappingProxyType({
        "certs": (
            "AWS Certified Cloud Practitioner",
            "Microsoft Azure Fundamentals (AZ-900)",
            "Google Cloud Digital Leader",
        ),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "aws": MappingProxyType({
        "certs": (
            "AWS Certified Solutions Architect – Associate",
            "AWS Certified Developer – Associate",
        ),
        "level": LEVEL_ASSOCIATE,
    }),
    "azure": MappingProxyType({
        "certs": (
            "Microsoft Certified: Azure Administrator Associate",
            "Microsoft Certified: Azure Developer Associate",
        ),
        "level": LEVEL_ASSOCIATE,
    }),
    "frontend": MappingProxyType({
        "certs": (
            "Meta Front-End Developer Professional Certificate",
            "freeCodeCamp Front End Development Libraries",
        ),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "react": MappingProxyType({
        "certs": ("Meta Front-End Developer Professional Certificate",),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "backend": MappingProxyType({
        "certs": (
            "Meta Back-End Developer Professional Certificate",
            "OpenJS Node.js Services Developer (JSNSD)",
        ),
        "level": LEVEL_ASSOCIATE,
    }),
    "node": MappingProxyType({
        "certs": ("OpenJS Node.js Application Developer (JSNAD)",),
        "level": LEVEL_ASSOCIATE,
    }),
    "devops": MappingProxyType({
        "certs": (
            "Docker Certified Associate",
            "Certified Kubernetes Administrator (CKA)",
        ),
        "level": LEVEL_PROFESSIONAL,
    }),
    "data": MappingProxyType({
        "certs": (
            "Google Data Analytics Professional Certificate",
            "IBM Data Science Professional Certificate",
        ),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "security": MappingProxyType({
        "certs": ("CompTIA Security+",),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "python": MappingProxyType({
        "certs": ("PCEP – Certified Entry-Level Python Programmer",),
        "level": LEVEL_FOUNDATIONAL,
    }),
    "java": MappingProxyType({
        "certs": ("Oracle Certified Professional: Java SE Programmer",),
        "level": LEVEL_ASSOCIATE,
    }),
})


def build_phrase_table() -> Dict[str, Tuple[str, ...]]:
    """Canonical name -> every spelling the keyword matcher should recognise."""
    table: Dict[str, Tuple[str, ...]] = {}
    for skill in CANONICAL_SKILLS:
        table[skill] = (skill,) + tuple(SKILL_ALIASES.get(skill, ()))
    return table


# Spellings that are also ordinary English words ("less", "slack", "rest").
# The keyword matcher only accepts these with their exact capitalization.
CASE_SENSITIVE_TERMS: FrozenSet[str] = frozenset({
    "Go", "R", "Less", "Chef", "Puppet", "Slack", "Notion", "Parcel", "Assembly", "Swift",
    "Oracle", "Helm", "Babel", "Vite", "Chai", "Mocha", "Jest", "Spring", "Express", "REST",
    "Rails", "Node", "Spark", "Kafka", "Julia", "Dart", "Lua", "Perl", "Android", "TS", "JS",
})
