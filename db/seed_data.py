"""
Seed Sample Data

Populates an empty storage with the demo accounts, the material catalog,
demo projects, citations and one supervision:
- student@unijos.edu.ng / password123 -> student
- staff@unijos.edu.ng / password123 -> staff
- admin@unijos.edu.ng / password123 -> admin

Every partition is checked on its own and only seeded when it is empty, so
running the seeder again adds nothing.

Run with: python -m db.seed_data
"""
from typing import Dict
import logging
import uuid

from db.citation_operations import CitationOperations
from db.project_operations import ProjectOperations
from db.record_store import RecordStore, USERS, MATERIALS
from db.supervision_operations import SupervisionOperations
from schemas import Project, Citation, Supervision, utc_now_iso

logger = logging.getLogger(__name__)


SAMPLE_USERS = [
    {
        'id': '1',
        'email': 'student@unijos.edu.ng',
        'password': 'password123',
        'name': 'John Doe',
        'role': 'student',
        'department': 'Computer Science',
        'studentId': 'CS/2020/001',
    },
    {
        'id': '2',
        'email': 'staff@unijos.edu.ng',
        'password': 'password123',
        'name': 'Dr. Sarah Johnson',
        'role': 'staff',
        'department': 'Computer Science',
        'staffId': 'STAFF/CS/001',
    },
    {
        'id': '3',
        'email': 'admin@unijos.edu.ng',
        'password': 'password123',
        'name': 'Admin User',
        'role': 'admin',
        'department': 'Administration',
    },
]

SAMPLE_MATERIALS = [
    # Computer Science Materials
    {
        'id': '1',
        'title': 'Advanced Data Structures and Algorithms',
        'author': 'Dr. Johnson Smith',
        'type': 'book',
        'year': '2023',
        'description': 'Comprehensive guide to advanced data structures including trees, graphs, and hash tables.',
        'keywords': ['data structures', 'algorithms', 'computer science', 'programming'],
        'downloads': 234,
        'uploadedBy': 'admin',
    },
    {
        'id': '2',
        'title': 'Machine Learning Applications in Agriculture',
        'author': 'Prof. Mary Adebayo',
        'type': 'journal',
        'year': '2024',
        'description': 'Research on applying machine learning techniques to improve agricultural productivity.',
        'keywords': ['machine learning', 'agriculture', 'AI', 'farming', 'productivity'],
        'downloads': 156,
        'uploadedBy': 'admin',
    },
    {
        'id': '3',
        'title': 'Sustainable Development in Nigeria',
        'author': 'Dr. Ibrahim Hassan',
        'type': 'article',
        'year': '2023',
        'description': 'Analysis of sustainable development practices and challenges in Nigeria.',
        'keywords': ['sustainable development', 'Nigeria', 'environment', 'policy'],
        'downloads': 89,
        'uploadedBy': 'admin',
    },
    {
        'id': '4',
        'title': 'Database Management Systems: Theory and Practice',
        'author': 'Prof. Sarah Johnson',
        'type': 'book',
        'year': '2023',
        'description': 'Complete reference for modern database design and implementation.',
        'keywords': ['database', 'SQL', 'DBMS', 'data management'],
        'downloads': 445,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '5',
        'title': 'Artificial Intelligence in Healthcare',
        'author': 'Dr. Michael Chen',
        'type': 'journal',
        'year': '2024',
        'description': 'Exploring AI applications in medical diagnosis and treatment.',
        'keywords': ['AI', 'healthcare', 'medical', 'diagnosis'],
        'downloads': 298,
        'uploadedBy': 'admin',
    },
    {
        'id': '6',
        'title': 'Software Engineering Best Practices',
        'author': 'Prof. David Wilson',
        'type': 'book',
        'year': '2023',
        'description': 'Industry standards and methodologies for software development.',
        'keywords': ['software engineering', 'agile', 'development', 'methodology'],
        'downloads': 367,
        'uploadedBy': 'admin',
    },
    {
        'id': '7',
        'title': 'Cybersecurity Fundamentals',
        'author': 'Dr. Lisa Brown',
        'type': 'book',
        'year': '2024',
        'description': 'Essential concepts in information security and cyber defense.',
        'keywords': ['cybersecurity', 'security', 'encryption', 'network security'],
        'downloads': 521,
        'uploadedBy': 'admin',
    },
    {
        'id': '8',
        'title': 'Web Development with React and Node.js',
        'author': 'Prof. James Taylor',
        'type': 'book',
        'year': '2024',
        'description': 'Modern web development using React frontend and Node.js backend.',
        'keywords': ['web development', 'React', 'Node.js', 'JavaScript'],
        'downloads': 612,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '9',
        'title': 'Mobile App Development with Flutter',
        'author': 'Dr. Emily Davis',
        'type': 'book',
        'year': '2024',
        'description': 'Cross-platform mobile app development using Flutter framework.',
        'keywords': ['mobile development', 'Flutter', 'Dart', 'cross-platform'],
        'downloads': 389,
        'uploadedBy': 'admin',
    },
    {
        'id': '10',
        'title': 'Cloud Computing Architecture',
        'author': 'Prof. Robert Lee',
        'type': 'book',
        'year': '2023',
        'description': 'Designing scalable cloud-based systems and infrastructure.',
        'keywords': ['cloud computing', 'AWS', 'Azure', 'architecture'],
        'downloads': 445,
        'uploadedBy': 'admin',
    },
    # Engineering Materials
    {
        'id': '11',
        'title': 'Structural Analysis in Civil Engineering',
        'author': 'Prof. Ahmed Musa',
        'type': 'book',
        'year': '2023',
        'description': 'Advanced methods for analyzing structural systems and loads.',
        'keywords': ['structural analysis', 'civil engineering', 'construction', 'mechanics'],
        'downloads': 234,
        'uploadedBy': 'admin',
    },
    {
        'id': '12',
        'title': 'Renewable Energy Systems Design',
        'author': 'Dr. Fatima Abdullahi',
        'type': 'journal',
        'year': '2024',
        'description': 'Design principles for solar, wind, and hydroelectric systems.',
        'keywords': ['renewable energy', 'solar power', 'wind energy', 'sustainability'],
        'downloads': 456,
        'uploadedBy': 'admin',
    },
    {
        'id': '13',
        'title': 'Materials Science and Engineering',
        'author': 'Prof. John Okafor',
        'type': 'book',
        'year': '2023',
        'description': 'Properties and applications of engineering materials.',
        'keywords': ['materials science', 'engineering', 'metallurgy', 'composites'],
        'downloads': 378,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '14',
        'title': 'Electrical Circuit Analysis',
        'author': 'Dr. Grace Okwu',
        'type': 'book',
        'year': '2024',
        'description': 'Fundamental principles of electrical circuit analysis and design.',
        'keywords': ['electrical engineering', 'circuits', 'electronics', 'analysis'],
        'downloads': 567,
        'uploadedBy': 'admin',
    },
    {
        'id': '15',
        'title': 'Mechanical Design and Manufacturing',
        'author': 'Prof. Peter Nwankwo',
        'type': 'book',
        'year': '2023',
        'description': 'Principles of mechanical system design and manufacturing processes.',
        'keywords': ['mechanical engineering', 'design', 'manufacturing', 'CAD'],
        'downloads': 423,
        'uploadedBy': 'admin',
    },
    # Business and Management
    {
        'id': '16',
        'title': 'Strategic Management in Nigerian Context',
        'author': 'Prof. Adaora Eze',
        'type': 'book',
        'year': '2024',
        'description': 'Strategic planning and management practices for Nigerian businesses.',
        'keywords': ['strategic management', 'business', 'Nigeria', 'planning'],
        'downloads': 298,
        'uploadedBy': 'admin',
    },
    {
        'id': '17',
        'title': 'Digital Marketing Strategies',
        'author': 'Dr. Kemi Adebayo',
        'type': 'book',
        'year': '2024',
        'description': 'Modern digital marketing techniques and social media strategies.',
        'keywords': ['digital marketing', 'social media', 'advertising', 'branding'],
        'downloads': 512,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '18',
        'title': 'Financial Management Principles',
        'author': 'Prof. Tunde Bakare',
        'type': 'book',
        'year': '2023',
        'description': 'Core concepts in corporate finance and investment analysis.',
        'keywords': ['finance', 'investment', 'corporate finance', 'analysis'],
        'downloads': 389,
        'uploadedBy': 'admin',
    },
    {
        'id': '19',
        'title': 'Entrepreneurship and Innovation',
        'author': 'Dr. Blessing Okoro',
        'type': 'book',
        'year': '2024',
        'description': 'Building successful startups and fostering innovation culture.',
        'keywords': ['entrepreneurship', 'innovation', 'startup', 'business development'],
        'downloads': 445,
        'uploadedBy': 'admin',
    },
    {
        'id': '20',
        'title': 'Human Resource Management',
        'author': 'Prof. Chioma Uche',
        'type': 'book',
        'year': '2023',
        'description': 'Modern HR practices and organizational behavior.',
        'keywords': ['human resources', 'management', 'organizational behavior', 'leadership'],
        'downloads': 334,
        'uploadedBy': 'admin',
    },
    # Sciences
    {
        'id': '21',
        'title': 'Advanced Organic Chemistry',
        'author': 'Prof. Moses Danladi',
        'type': 'book',
        'year': '2024',
        'description': 'Comprehensive study of organic chemical reactions and mechanisms.',
        'keywords': ['organic chemistry', 'reactions', 'mechanisms', 'synthesis'],
        'downloads': 267,
        'uploadedBy': 'admin',
    },
    {
        'id': '22',
        'title': 'Molecular Biology Techniques',
        'author': 'Dr. Ruth Yakubu',
        'type': 'journal',
        'year': '2024',
        'description': 'Modern techniques in molecular biology and genetic analysis.',
        'keywords': ['molecular biology', 'genetics', 'DNA', 'laboratory techniques'],
        'downloads': 398,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '23',
        'title': 'Physics of Semiconductor Devices',
        'author': 'Prof. Daniel Gyang',
        'type': 'book',
        'year': '2023',
        'description': 'Physical principles underlying semiconductor device operation.',
        'keywords': ['semiconductor physics', 'electronics', 'quantum mechanics', 'devices'],
        'downloads': 456,
        'uploadedBy': 'admin',
    },
    {
        'id': '24',
        'title': 'Environmental Chemistry and Pollution',
        'author': 'Dr. Mary Pam',
        'type': 'article',
        'year': '2024',
        'description': 'Chemical processes in environmental systems and pollution control.',
        'keywords': ['environmental chemistry', 'pollution', 'environmental science', 'remediation'],
        'downloads': 223,
        'uploadedBy': 'admin',
    },
    {
        'id': '25',
        'title': 'Mathematical Methods in Physics',
        'author': 'Prof. Joseph Dung',
        'type': 'book',
        'year': '2023',
        'description': 'Advanced mathematical techniques for physics applications.',
        'keywords': ['mathematical physics', 'calculus', 'differential equations', 'physics'],
        'downloads': 345,
        'uploadedBy': 'admin',
    },
    # Medical and Health Sciences
    {
        'id': '26',
        'title': 'Clinical Pathology and Diagnostics',
        'author': 'Dr. Stella Pwajok',
        'type': 'book',
        'year': '2024',
        'description': 'Modern approaches to clinical diagnosis and pathological analysis.',
        'keywords': ['clinical pathology', 'diagnostics', 'medicine', 'laboratory medicine'],
        'downloads': 412,
        'uploadedBy': 'admin',
    },
    {
        'id': '27',
        'title': 'Public Health in Developing Countries',
        'author': 'Prof. Emmanuel Choji',
        'type': 'journal',
        'year': '2024',
        'description': 'Public health challenges and solutions in developing nations.',
        'keywords': ['public health', 'developing countries', 'epidemiology', 'health policy'],
        'downloads': 289,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '28',
        'title': 'Pharmacology and Drug Development',
        'author': 'Dr. Rebecca Dung',
        'type': 'book',
        'year': '2023',
        'description': 'Principles of pharmacology and modern drug discovery processes.',
        'keywords': ['pharmacology', 'drug development', 'medicine', 'therapeutics'],
        'downloads': 356,
        'uploadedBy': 'admin',
    },
    # Agriculture and Food Science
    {
        'id': '29',
        'title': 'Sustainable Agriculture Practices',
        'author': 'Prof. Yakubu Dogon-Yaro',
        'type': 'book',
        'year': '2024',
        'description': 'Sustainable farming techniques for improved productivity.',
        'keywords': ['sustainable agriculture', 'farming', 'crop production', 'sustainability'],
        'downloads': 378,
        'uploadedBy': 'admin',
    },
    {
        'id': '30',
        'title': 'Food Science and Technology',
        'author': 'Dr. Hawa Muazu',
        'type': 'book',
        'year': '2023',
        'description': 'Food processing, preservation, and safety technologies.',
        'keywords': ['food science', 'food technology', 'food safety', 'processing'],
        'downloads': 445,
        'uploadedBy': 'admin',
    },
    # Social Sciences and Humanities
    {
        'id': '31',
        'title': 'Nigerian Political Economy',
        'author': 'Prof. Samson Mancha',
        'type': 'book',
        'year': '2024',
        'description': 'Analysis of Nigeria\'s political and economic systems.',
        'keywords': ['political economy', 'Nigeria', 'politics', 'economics'],
        'downloads': 234,
        'uploadedBy': 'admin',
    },
    {
        'id': '32',
        'title': 'African Literature and Culture',
        'author': 'Dr. Joy Kwanga',
        'type': 'book',
        'year': '2023',
        'description': 'Collection of contemporary African literary works and cultural studies.',
        'keywords': ['African literature', 'culture', 'humanities', 'literature'],
        'downloads': 198,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '33',
        'title': 'Educational Psychology',
        'author': 'Prof. Comfort Dogo',
        'type': 'book',
        'year': '2024',
        'description': 'Psychological principles in educational settings and learning.',
        'keywords': ['educational psychology', 'learning', 'education', 'psychology'],
        'downloads': 312,
        'uploadedBy': 'admin',
    },
    {
        'id': '34',
        'title': 'Sociology of Development',
        'author': 'Dr. Philip Dachung',
        'type': 'book',
        'year': '2023',
        'description': 'Sociological perspectives on development and social change.',
        'keywords': ['sociology', 'development', 'social change', 'society'],
        'downloads': 267,
        'uploadedBy': 'admin',
    },
    # Research Papers and Theses
    {
        'id': '35',
        'title': 'Impact of Climate Change on Agriculture in Northern Nigeria',
        'author': 'Ibrahim Sani (MSc Thesis)',
        'type': 'thesis',
        'year': '2024',
        'description': 'Research on climate change effects on agricultural productivity.',
        'keywords': ['climate change', 'agriculture', 'Nigeria', 'research'],
        'downloads': 156,
        'uploadedBy': 'student@unijos.edu.ng',
    },
    {
        'id': '36',
        'title': 'Blockchain Technology in Supply Chain Management',
        'author': 'Grace Okechukwu (PhD Dissertation)',
        'type': 'thesis',
        'year': '2024',
        'description': 'Application of blockchain in improving supply chain transparency.',
        'keywords': ['blockchain', 'supply chain', 'technology', 'management'],
        'downloads': 289,
        'uploadedBy': 'student@unijos.edu.ng',
    },
    {
        'id': '37',
        'title': 'Mental Health Awareness Among University Students',
        'author': 'Fatima Bello (BSc Project)',
        'type': 'thesis',
        'year': '2023',
        'description': 'Study on mental health awareness and support systems.',
        'keywords': ['mental health', 'students', 'psychology', 'awareness'],
        'downloads': 198,
        'uploadedBy': 'student@unijos.edu.ng',
    },
    {
        'id': '38',
        'title': 'Renewable Energy Potential in Plateau State',
        'author': 'John Mallo (MSc Thesis)',
        'type': 'thesis',
        'year': '2024',
        'description': 'Assessment of solar and wind energy potential in Plateau State.',
        'keywords': ['renewable energy', 'Plateau State', 'solar energy', 'wind energy'],
        'downloads': 234,
        'uploadedBy': 'student@unijos.edu.ng',
    },
    {
        'id': '39',
        'title': 'Digital Banking Adoption in Nigeria',
        'author': 'Blessing Choji (MBA Project)',
        'type': 'thesis',
        'year': '2024',
        'description': 'Analysis of factors affecting digital banking adoption.',
        'keywords': ['digital banking', 'fintech', 'adoption', 'Nigeria'],
        'downloads': 345,
        'uploadedBy': 'student@unijos.edu.ng',
    },
    # Technical Reports and Conference Papers
    {
        'id': '40',
        'title': 'Laboratory Safety Guidelines for Research',
        'author': 'University Safety Committee',
        'type': 'conference-paper',
        'year': '2024',
        'description': 'Comprehensive safety guidelines for laboratory work.',
        'keywords': ['safety', 'laboratory', 'guidelines', 'research'],
        'downloads': 567,
        'uploadedBy': 'admin',
    },
    {
        'id': '41',
        'title': 'Research Methodology in Academic Writing',
        'author': 'Graduate School',
        'type': 'conference-paper',
        'year': '2023',
        'description': 'Guidelines for conducting academic research.',
        'keywords': ['research methodology', 'academic writing', 'research', 'guidelines'],
        'downloads': 678,
        'uploadedBy': 'admin',
    },
    {
        'id': '42',
        'title': 'Student Academic Policies and Procedures',
        'author': 'Academic Affairs Office',
        'type': 'article',
        'year': '2024',
        'description': 'Complete guide to academic policies and procedures.',
        'keywords': ['academic policies', 'procedures', 'students', 'guidelines'],
        'downloads': 789,
        'uploadedBy': 'admin',
    },
    # Recent Journal Articles
    {
        'id': '43',
        'title': 'Artificial Intelligence in Education: Opportunities and Challenges',
        'author': 'Dr. Samuel Pwaveno',
        'type': 'journal',
        'year': '2024',
        'description': 'Comprehensive review of AI applications in educational settings.',
        'keywords': ['artificial intelligence', 'education', 'technology', 'learning'],
        'downloads': 423,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '44',
        'title': 'Nanotechnology Applications in Medicine',
        'author': 'Prof. Martha Dalyop',
        'type': 'journal',
        'year': '2024',
        'description': 'Recent advances in medical nanotechnology applications.',
        'keywords': ['nanotechnology', 'medicine', 'healthcare', 'innovation'],
        'downloads': 356,
        'uploadedBy': 'admin',
    },
    {
        'id': '45',
        'title': 'Internet of Things in Smart Cities',
        'author': 'Dr. Victor Pam',
        'type': 'article',
        'year': '2024',
        'description': 'IoT implementation strategies for smart city development.',
        'keywords': ['IoT', 'smart cities', 'urban planning', 'technology'],
        'downloads': 298,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    # Additional Materials
    {
        'id': '46',
        'title': 'Quantum Computing Fundamentals',
        'author': 'Prof. Bitrus Shuaibu',
        'type': 'book',
        'year': '2024',
        'description': 'Introduction to quantum computing principles and applications.',
        'keywords': ['quantum computing', 'physics', 'computing', 'quantum mechanics'],
        'downloads': 445,
        'uploadedBy': 'admin',
    },
    {
        'id': '47',
        'title': 'Data Analytics for Business Intelligence',
        'author': 'Dr. Rahila Muhammad',
        'type': 'book',
        'year': '2024',
        'description': 'Using data analytics for business decision making.',
        'keywords': ['data analytics', 'business intelligence', 'data science', 'analysis'],
        'downloads': 567,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '48',
        'title': 'Robotics and Automation Engineering',
        'author': 'Prof. Sunday Gyang',
        'type': 'book',
        'year': '2023',
        'description': 'Principles of robotics design and industrial automation.',
        'keywords': ['robotics', 'automation', 'engineering', 'manufacturing'],
        'downloads': 389,
        'uploadedBy': 'admin',
    },
    {
        'id': '49',
        'title': 'Biomedical Engineering Applications',
        'author': 'Dr. Esther Davou',
        'type': 'journal',
        'year': '2024',
        'description': 'Modern applications of engineering in medical devices.',
        'keywords': ['biomedical engineering', 'medical devices', 'healthcare', 'technology'],
        'downloads': 234,
        'uploadedBy': 'admin',
    },
    {
        'id': '50',
        'title': 'Geoinformatics and Remote Sensing',
        'author': 'Prof. Yakubu Kigbu',
        'type': 'book',
        'year': '2024',
        'description': 'Geographic information systems and remote sensing techniques.',
        'keywords': ['GIS', 'remote sensing', 'geoinformatics', 'mapping'],
        'downloads': 312,
        'uploadedBy': 'admin',
    },
    {
        'id': '51',
        'title': 'Green Chemistry and Sustainable Processes',
        'author': 'Dr. Comfort Pwantu',
        'type': 'article',
        'year': '2024',
        'description': 'Environmentally friendly chemical processes and green chemistry.',
        'keywords': ['green chemistry', 'sustainability', 'environmental chemistry', 'processes'],
        'downloads': 278,
        'uploadedBy': 'staff@unijos.edu.ng',
    },
    {
        'id': '52',
        'title': 'Financial Technology and Digital Banking',
        'author': 'Prof. Godwin Pam',
        'type': 'book',
        'year': '2024',
        'description': 'Impact of fintech on traditional banking systems.',
        'keywords': ['fintech', 'digital banking', 'financial technology', 'innovation'],
        'downloads': 456,
        'uploadedBy': 'admin',
    },
]

SAMPLE_PROJECTS = [
    ('AI-Powered Student Performance Prediction System',
     'Development of a machine learning system to predict student academic performance based on various factors.',
     'under-review'),
    ('Solar Energy Management System for Rural Communities',
     'Design and implementation of a smart solar energy management system for off-grid rural communities.',
     'approved'),
    ('Blockchain-Based Voting System',
     'Secure electronic voting system using blockchain technology for transparent elections.',
     'under-review'),
    ('Mobile Health App for Diabetes Management',
     'Cross-platform mobile application for diabetes patients to track glucose levels and medication.',
     'draft'),
    ('Smart Irrigation System Using IoT',
     'Internet of Things based automated irrigation system for precision agriculture.',
     'submitted'),
    ('E-Learning Platform for Remote Education',
     'Comprehensive e-learning management system with video conferencing and assessment tools.',
     'approved'),
    ('Waste Management Optimization Using Machine Learning',
     'ML algorithms to optimize waste collection routes and recycling processes.',
     'under-review'),
    ('Cryptocurrency Price Prediction Model',
     'Deep learning model for predicting cryptocurrency price movements using sentiment analysis.',
     'draft'),
    ('Automated Traffic Management System',
     'AI-powered traffic light control system to reduce congestion in urban areas.',
     'submitted'),
    ('Telemedicine Platform for Rural Healthcare',
     'Web-based telemedicine platform connecting rural patients with urban healthcare providers.',
     'approved'),
    ('Smart Home Energy Monitoring System',
     'IoT-based system for monitoring and optimizing household energy consumption.',
     'under-review'),
    ('Natural Language Processing for Local Languages',
     'NLP tools and models for processing Nigerian local languages.',
     'draft'),
    ('Drone-Based Crop Monitoring System',
     'Autonomous drone system for monitoring crop health using computer vision.',
     'submitted'),
    ('Digital Library Management System',
     'Comprehensive digital library system with advanced search and recommendation features.',
     'approved'),
    ('Augmented Reality Education App',
     'AR application for interactive learning in science and engineering subjects.',
     'under-review'),
    ('Water Quality Monitoring Network',
     'Sensor network for real-time monitoring of water quality parameters.',
     'draft'),
    ('Cloud-Based Hospital Management System',
     'Scalable cloud-based system for managing hospital operations and patient records.',
     'submitted'),
    ('Machine Learning for Medical Image Analysis',
     'Deep learning models for automated analysis of medical imaging data.',
     'approved'),
    ('Smart Parking Management System',
     'IoT-enabled parking management with mobile app integration.',
     'under-review'),
    ('Biometric Authentication Security System',
     'Multi-modal biometric authentication system for enhanced security.',
     'draft'),
]

SAMPLE_STUDENT_ID = '1'
SAMPLE_SUPERVISOR_ID = '2'

# (资料id, 第几个项目, 是否已审核, 审核意见)
SAMPLE_CITATIONS = [
    ('1', 0, True, 'Good source for data structures research'),
    ('2', 0, True, None),
    ('12', 1, True, 'Relevant for solar energy project'),
    ('36', 2, False, None),
]


def _seed_users(storage) -> int:
    store = RecordStore(storage, USERS)
    if store.count() > 0:
        return 0
    now = utc_now_iso()
    store.replace_all([{**user, 'createdAt': now} for user in SAMPLE_USERS])
    return len(SAMPLE_USERS)


def _seed_materials(storage) -> int:
    store = RecordStore(storage, MATERIALS)
    if store.count() > 0:
        return 0
    now = utc_now_iso()
    store.replace_all([{**material, 'createdAt': now} for material in SAMPLE_MATERIALS])
    return len(SAMPLE_MATERIALS)


def _seed_projects(storage) -> int:
    project_ops = ProjectOperations(storage)
    if project_ops.store.count() > 0:
        return 0
    now = utc_now_iso()
    projects = [
        Project(
            id=uuid.uuid4().hex[:9],
            title=title,
            description=description,
            student_id=SAMPLE_STUDENT_ID,
            supervisor_id=SAMPLE_SUPERVISOR_ID,
            status=status,
            created_at=now,
            updated_at=now,
        ).to_record()
        for title, description, status in SAMPLE_PROJECTS
    ]
    project_ops.store.replace_all(projects)
    return len(projects)


def _seed_citations(storage) -> int:
    citation_ops = CitationOperations(storage)
    if citation_ops.store.count() > 0:
        return 0
    # 引用挂在当前存储中的前三个项目上
    projects = ProjectOperations(storage).get_projects()
    citations = []
    for material_id, project_index, is_validated, notes in SAMPLE_CITATIONS:
        if project_index < len(projects):
            project_id = projects[project_index]['id']
        else:
            project_id = str(project_index + 1)
        citations.append(Citation(
            id=str(uuid.uuid4()),
            material_id=material_id,
            project_id=project_id,
            student_id=SAMPLE_STUDENT_ID,
            is_validated=is_validated,
            validated_by=SAMPLE_SUPERVISOR_ID if is_validated else None,
            validation_notes=notes,
        ).to_record())
    citation_ops.store.replace_all(citations)
    return len(citations)


def _seed_supervisions(storage) -> int:
    supervision_ops = SupervisionOperations(storage)
    if supervision_ops.store.count() > 0:
        return 0
    supervision_ops.store.replace_all([
        Supervision(
            id=str(uuid.uuid4()),
            student_id=SAMPLE_STUDENT_ID,
            supervisor_id=SAMPLE_SUPERVISOR_ID,
            status='active',
        ).to_record()
    ])
    return 1


def initialize_sample_data(storage) -> Dict[str, int]:
    """写入演示数据，已有数据的分区保持不变

    Args:
        storage: 键值存储

    Returns:
        Dict[str, int]: 各分区新写入的记录数
    """
    with storage.lock:
        inserted = {
            'users': _seed_users(storage),
            'materials': _seed_materials(storage),
            'projects': _seed_projects(storage),
            'citations': _seed_citations(storage),
            'supervisions': _seed_supervisions(storage),
        }
    if any(inserted.values()):
        logger.info(f"演示数据写入完成: {inserted}")
    return inserted


if __name__ == "__main__":
    from config import LOGGING_CONFIG
    from db.storage import create_storage

    logging.basicConfig(level=LOGGING_CONFIG['level'], format=LOGGING_CONFIG['format'])
    initialize_sample_data(create_storage())
