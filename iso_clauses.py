"""
ISO Management-System Clause Catalog

Static reference content seeded into the database:
- STANDARDS: the seven supported standards
- COMMON_CLAUSE_TITLES: High Level Structure (Annex SL) top-level clauses 4-10
- SUB_CLAUSES: per-standard sub-clause tables (parent number, number, title, description)
- COMMON_HLS_SUB_CLAUSES: sub-clause numbers shared by every standard
- DOMAIN_CROSS_REFERENCES: curated RELATED / SUPPORTING links
"""

from models import STANDARD_CODES


STANDARDS = [
    {
        "code": "ISO9001",
        "name": "ISO 9001:2015",
        "description": "Quality Management Systems - Requirements",
        "version": "2015",
    },
    {
        "code": "ISO14001",
        "name": "ISO 14001:2015",
        "description": "Environmental Management Systems - Requirements with guidance for use",
        "version": "2015",
    },
    {
        "code": "ISO45001",
        "name": "ISO 45001:2018",
        "description": "Occupational Health and Safety Management Systems - Requirements with guidance for use",
        "version": "2018",
    },
    {
        "code": "ISO22301",
        "name": "ISO 22301:2019",
        "description": "Business Continuity Management Systems - Requirements",
        "version": "2019",
    },
    {
        "code": "ISO27001",
        "name": "ISO 27001:2022",
        "description": "Information Security Management Systems - Requirements",
        "version": "2022",
    },
    {
        "code": "ISO37001",
        "name": "ISO 37001:2016",
        "description": "Anti-bribery Management Systems - Requirements with guidance for use",
        "version": "2016",
    },
    {
        "code": "ISO39001",
        "name": "ISO 39001:2012",
        "description": "Road Traffic Safety Management Systems - Requirements with guidance for use",
        "version": "2012",
    },
]

COMMON_CLAUSE_TITLES = {
    "4": "Context of the Organization",
    "5": "Leadership",
    "6": "Planning",
    "7": "Support",
    "8": "Operation",
    "9": "Performance Evaluation",
    "10": "Improvement",
}

# Sub-clause numbers present in all seven standards
COMMON_HLS_SUB_CLAUSES = [
    "4.1", "4.2", "4.3", "4.4",
    "5.1", "5.2", "5.3",
    "6.1", "6.2",
    "7.1", "7.2", "7.3", "7.4", "7.5",
    "8.1", "8.2",
    "9.1", "9.2", "9.3",
    "10.1", "10.2",
]


# ============================================================================
# Sub-Clauses: (parent clause number, clause number, title, description)
# ============================================================================

SUB_CLAUSES = {
    "ISO9001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose and strategic direction that affect its ability to achieve the intended results of its quality management system."),
        ("4", "4.2", "Understanding the needs and expectations of interested parties",
         "Determine the interested parties relevant to the QMS and their requirements, and monitor and review information about them."),
        ("4", "4.3", "Determining the scope of the quality management system",
         "Determine the boundaries and applicability of the QMS considering external and internal issues, interested party requirements, and the products and services of the organization."),
        ("4", "4.4", "Quality management system and its processes",
         "Establish, implement, maintain and continually improve the QMS, including the processes needed, their sequence and interaction, criteria, resources and responsibilities."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment with respect to the QMS and customer focus, taking accountability for QMS effectiveness and promoting the process approach and risk-based thinking."),
        ("5", "5.2", "Policy",
         "Top management shall establish, implement and maintain a quality policy appropriate to the purpose and context of the organization that provides a framework for quality objectives and is communicated and available."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure responsibilities and authorities for relevant roles are assigned, communicated and understood within the organization."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine the risks and opportunities that need to be addressed to give assurance the QMS can achieve its intended results, and plan actions proportionate to their potential impact."),
        ("6", "6.2", "Quality objectives and planning to achieve them",
         "Establish measurable quality objectives at relevant functions, levels and processes, and plan what will be done, with what resources, by whom and by when."),
        ("6", "6.3", "Planning of changes",
         "Carry out changes to the QMS in a planned manner, considering their purpose and consequences, the integrity of the QMS, resource availability and responsibilities."),
        ("7", "7.1", "Resources",
         "Determine and provide the people, infrastructure, process environment, monitoring and measuring resources and organizational knowledge needed for the QMS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects quality performance, ensure they are competent, and retain documented information as evidence."),
        ("7", "7.3", "Awareness",
         "Ensure persons doing work under the organization's control are aware of the quality policy, relevant quality objectives, their contribution to QMS effectiveness and the implications of nonconformity."),
        ("7", "7.4", "Communication",
         "Determine the internal and external communications relevant to the QMS, including what, when, with whom, how and who communicates."),
        ("7", "7.5", "Documented information",
         "Create, update and control the documented information required by the standard and determined necessary for QMS effectiveness."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement and control the processes needed to meet the requirements for the provision of products and services, including outsourced processes and planned changes."),
        ("8", "8.2", "Requirements for products and services",
         "Communicate with customers, determine and review the requirements for products and services, and manage changes to those requirements."),
        ("8", "8.3", "Design and development of products and services",
         "Establish, implement and maintain a design and development process covering planning, inputs, controls, outputs and changes."),
        ("8", "8.4", "Control of externally provided processes, products and services",
         "Ensure externally provided processes, products and services conform to requirements, and evaluate, select, monitor and re-evaluate external providers."),
        ("8", "8.5", "Production and service provision",
         "Implement production and service provision under controlled conditions, including identification and traceability, preservation, post-delivery activities and control of changes."),
        ("8", "8.6", "Release of products and services",
         "Implement planned arrangements at appropriate stages to verify that product and service requirements have been met before release to the customer."),
        ("8", "8.7", "Control of nonconforming outputs",
         "Ensure outputs that do not conform to requirements are identified and controlled to prevent unintended use or delivery, and retain documented information on the actions taken."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Determine what needs to be monitored and measured, the methods and timing, and analyse and evaluate the results including customer satisfaction and QMS performance."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to determine whether the QMS conforms to planned arrangements and requirements and is effectively implemented and maintained."),
        ("9", "9.3", "Management review",
         "Top management shall review the QMS at planned intervals to ensure its continuing suitability, adequacy, effectiveness and alignment with the strategic direction of the organization."),
        ("10", "10.1", "General",
         "Determine and select opportunities for improvement and implement any necessary actions to meet customer requirements and enhance customer satisfaction."),
        ("10", "10.2", "Nonconformity and corrective action",
         "React to nonconformities, evaluate the need to eliminate their causes, implement corrective action, review its effectiveness and update risks and opportunities where necessary."),
        ("10", "10.3", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the QMS, considering the results of analysis, evaluation and management review."),
    ],
    "ISO14001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose that affect its ability to achieve the intended outcomes of its environmental management system."),
        ("4", "4.2", "Understanding the needs and expectations of interested parties",
         "Determine interested parties relevant to the EMS, their relevant needs and expectations, and which of those become compliance obligations."),
        ("4", "4.3", "Determining the scope of the environmental management system",
         "Determine the boundaries and applicability of the EMS considering external/internal issues, compliance obligations, organizational units, functions, physical boundaries, activities, products and services, and authority to exercise control."),
        ("4", "4.4", "Environmental management system",
         "Establish, implement, maintain and continually improve the EMS, including the processes needed and their interactions, to enhance environmental performance."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment by taking accountability for EMS effectiveness, establishing environmental policy and objectives, integrating EMS requirements into business processes, and ensuring resources are available."),
        ("5", "5.2", "Environmental policy",
         "Top management shall establish, implement and maintain an environmental policy appropriate to the purpose and context of the organization including commitments to protection of the environment, fulfilment of compliance obligations, and continual improvement."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure responsibilities and authorities for relevant roles are assigned and communicated within the organization to ensure the EMS conforms to requirements and to report on EMS performance."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine risks and opportunities related to environmental aspects, compliance obligations, and other issues that need to be addressed to ensure the EMS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement."),
        ("6", "6.1.2", "Environmental aspects",
         "Determine the environmental aspects of activities, products and services that the organization can control and influence, and their associated environmental impacts, considering a life cycle perspective."),
        ("6", "6.1.3", "Compliance obligations",
         "Determine and have access to the compliance obligations related to its environmental aspects and understand how they apply to the organization."),
        ("6", "6.1.4", "Planning action",
         "Plan actions to address significant environmental aspects, compliance obligations, and risks and opportunities; and how to integrate and implement the actions in its EMS processes and evaluate their effectiveness."),
        ("6", "6.2", "Environmental objectives and planning to achieve them",
         "Establish environmental objectives at relevant functions and levels, considering significant aspects, compliance obligations, and risks and opportunities. Objectives shall be consistent with the environmental policy and be measurable, monitored, communicated and updated."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the EMS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects environmental performance and EMS effectiveness, ensure they are competent on the basis of education, training or experience, and take actions to acquire the necessary competence."),
        ("7", "7.3", "Awareness",
         "Ensure persons doing work under the organization's control are aware of the environmental policy, significant environmental aspects and related impacts, their contribution to EMS effectiveness, and implications of not conforming."),
        ("7", "7.4", "Communication",
         "Establish, implement and maintain processes for internal and external communications relevant to the EMS, including what, when, with whom, and how to communicate, taking into account compliance obligations and consistency with EMS information."),
        ("7", "7.5", "Documented information",
         "The EMS shall include documented information required by this standard and determined by the organization as being necessary for EMS effectiveness. Control creation, updating, distribution, access, retrieval, storage, preservation, and disposition of documented information."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement, control and maintain processes needed to meet EMS requirements and to implement actions related to significant environmental aspects, compliance obligations, and risks and opportunities. Establish operating criteria and implement controls using a life cycle perspective."),
        ("8", "8.2", "Emergency preparedness and response",
         "Establish, implement and maintain processes for preparing for and responding to potential emergency situations that can have an environmental impact, including planned response actions, periodic testing and review of processes and response actions."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Monitor, measure, analyse and evaluate environmental performance. Determine what needs to be monitored and measured, the methods, criteria and indicators, and when results shall be analysed and evaluated. Evaluate compliance with compliance obligations."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to provide information on whether the EMS conforms to the organization's own requirements and to this standard, and is effectively implemented and maintained. Plan, establish, implement and maintain audit programmes."),
        ("9", "9.3", "Management review",
         "Top management shall review the EMS at planned intervals to ensure its continuing suitability, adequacy and effectiveness. Consider the status of actions from previous reviews, changes in context, needs of interested parties, significant aspects, risks, and the extent to which objectives have been achieved."),
        ("10", "10.1", "General",
         "Determine opportunities for improvement and implement necessary actions to achieve the intended outcomes of the EMS."),
        ("10", "10.2", "Nonconformity and corrective action",
         "When a nonconformity occurs, react to control and correct it, evaluate the need for action to eliminate root causes, implement action needed, review effectiveness of corrective actions, and make changes to the EMS if necessary."),
        ("10", "10.3", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the EMS to enhance environmental performance."),
    ],
    "ISO45001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose that affect its ability to achieve the intended outcomes of the OH&S management system."),
        ("4", "4.2", "Understanding the needs and expectations of workers and other interested parties",
         "Determine the workers and other interested parties relevant to the OH&S MS, and their relevant needs and expectations (requirements)."),
        ("4", "4.3", "Determining the scope of the OH&S management system",
         "Determine the boundaries and applicability of the OH&S MS to establish its scope, considering the external and internal issues, the requirements of workers and interested parties, and the planned or performed work-related activities."),
        ("4", "4.4", "OH&S management system",
         "Establish, implement, maintain and continually improve the OH&S MS, including the processes needed and their interactions, to improve OH&S performance."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment by taking overall responsibility and accountability for prevention of work-related injury and ill health, and for provision of safe and healthy workplaces and activities."),
        ("5", "5.2", "OH&S policy",
         "Top management shall establish, implement and maintain an OH&S policy that includes commitments to provide safe and healthy working conditions, elimination of hazards and reduction of OH&S risks, and consultation and participation of workers."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure responsibilities and authorities for relevant roles within the OH&S MS are assigned and communicated at all levels within the organization, and maintained as documented information."),
        ("5", "5.4", "Consultation and participation of workers",
         "Establish, implement and maintain processes for consultation and participation of workers at all applicable levels and functions, and where they exist, workers' representatives, in the development, planning, implementation, performance evaluation and actions for improvement of the OH&S MS."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine risks and opportunities that need to be addressed to ensure the OH&S MS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement."),
        ("6", "6.1.2", "Hazard identification and assessment of risks and opportunities",
         "Establish, implement and maintain ongoing and proactive processes for hazard identification that consider how work is organized, social factors, routine and non-routine activities, past incidents, and potential emergency situations."),
        ("6", "6.1.3", "Determination of legal requirements and other requirements",
         "Determine and have access to up-to-date legal requirements and other requirements applicable to its hazards, OH&S risks and OH&S MS, and determine how they apply to the organization."),
        ("6", "6.1.4", "Planning action",
         "Plan actions to address risks and opportunities, legal and other requirements; how to integrate and implement the actions in the OH&S MS processes, and evaluate their effectiveness, taking into account the hierarchy of controls and the output of the OH&S MS."),
        ("6", "6.2", "OH&S objectives and planning to achieve them",
         "Establish OH&S objectives at relevant functions and levels to maintain and continually improve the OH&S MS and OH&S performance. Objectives shall be consistent with the OH&S policy, be measurable, take into account legal requirements, and consider consultation with workers."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the OH&S MS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of workers that affects or can affect OH&S performance, ensure workers are competent on the basis of education, training or experience, and take actions to acquire and maintain the necessary competence."),
        ("7", "7.3", "Awareness",
         "Workers shall be made aware of the OH&S policy and objectives, their contribution to the OH&S MS effectiveness, the implications of not conforming, incidents and outcomes of investigation relevant to them, and hazards, risks and actions determined relevant to them."),
        ("7", "7.4", "Communication",
         "Establish, implement and maintain processes for internal and external communications relevant to the OH&S MS, including what, when, with whom, and how to communicate, considering diversity aspects and the views of interested parties."),
        ("7", "7.5", "Documented information",
         "The OH&S MS shall include documented information required by this standard and determined by the organization as being necessary for OH&S MS effectiveness. Control creation, updating, and control of documented information."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement, control and maintain processes needed to meet OH&S MS requirements by establishing criteria for the processes, implementing control of processes in accordance with the criteria, adapting work to workers, and using the hierarchy of controls."),
        ("8", "8.1.2", "Eliminating hazards and reducing OH&S risks",
         "Establish, implement and maintain processes for the elimination of hazards and reduction of OH&S risks using the hierarchy of controls: elimination, substitution, engineering controls, administrative controls, and personal protective equipment."),
        ("8", "8.1.3", "Management of change",
         "Establish processes for the implementation and control of planned temporary and permanent changes that impact OH&S performance, including new products, processes, work design, work conditions, equipment, and changes to legal requirements."),
        ("8", "8.1.4", "Procurement",
         "Establish, implement and maintain processes to control the procurement of products and services in order to ensure their conformity to the OH&S MS requirements, including coordination with contractors and outsourcing."),
        ("8", "8.2", "Emergency preparedness and response",
         "Establish, implement and maintain processes for preparing for and responding to potential emergency situations including first aid provision, training for planned responses, periodic testing and exercising, and post-event evaluation."),
        ("9", "9.1", "Monitoring, measurement, analysis and performance evaluation",
         "Establish, implement and maintain processes for monitoring, measurement, analysis and performance evaluation. Determine what needs to be monitored and measured, including the extent to which legal and other requirements are fulfilled, and OH&S performance criteria."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to determine whether the OH&S MS conforms to planned arrangements and to the requirements of this standard, and is effectively implemented and maintained."),
        ("9", "9.3", "Management review",
         "Top management shall review the OH&S MS at planned intervals to ensure its continuing suitability, adequacy and effectiveness. Review inputs shall include the status of previous actions, changes in context, OH&S performance trends, consultation inputs from workers, and opportunities for continual improvement."),
        ("10", "10.1", "General",
         "Determine opportunities for improvement and implement necessary actions to achieve the intended outcomes of the OH&S MS."),
        ("10", "10.2", "Incident, nonconformity and corrective action",
         "Establish, implement and maintain processes for reporting, investigating and taking action to determine and manage incidents and nonconformities. React to incidents and nonconformities, evaluate the need for corrective action to eliminate root causes, review effectiveness of actions, and consider participation of workers."),
        ("10", "10.3", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the OH&S MS by enhancing OH&S performance, promoting a culture of consultation and participation, and communicating outcomes of continual improvement to workers."),
    ],
    "ISO22301": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose and that affect its ability to achieve the intended outcomes of its business continuity management system."),
        ("4", "4.2", "Understanding the needs and expectations of interested parties",
         "Determine the interested parties relevant to the BCMS, their requirements relevant to business continuity, and the legal and regulatory requirements and contractual obligations applicable."),
        ("4", "4.3", "Determining the scope of the BCMS",
         "Determine the boundaries and applicability of the BCMS to establish its scope, considering the external and internal issues, the requirements of interested parties, and the products, services and activities of the organization."),
        ("4", "4.4", "Business continuity management system",
         "Establish, implement, maintain and continually improve a BCMS, including the processes needed and their interactions."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment by ensuring the BCMS policy and objectives are established and compatible with the strategic direction of the organization."),
        ("5", "5.2", "Policy",
         "Top management shall establish a business continuity policy that is appropriate to the purpose of the organization, provides a framework for setting objectives, includes a commitment to satisfy applicable requirements, and a commitment to continual improvement of the BCMS."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure that responsibilities and authorities for relevant roles are assigned and communicated within the organization."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine the risks and opportunities that need to be addressed to ensure the BCMS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement."),
        ("6", "6.2", "Business continuity objectives and plans to achieve them",
         "Establish business continuity objectives at relevant functions and levels that are consistent with the business continuity policy, are measurable, take into account applicable requirements, and are monitored and updated."),
        ("6", "6.3", "Planning changes to the BCMS",
         "When the organization determines the need for changes to the BCMS, the changes shall be carried out in a planned and systematic manner."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the BCMS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects the BCMS performance, ensure they are competent on the basis of education, training or experience, and take actions to acquire the necessary competence."),
        ("7", "7.3", "Awareness",
         "Persons doing work under the organization's control shall be aware of the business continuity policy, their contribution to the BCMS effectiveness, the implications of not conforming, and their role during a disruptive incident."),
        ("7", "7.4", "Communication",
         "Determine the need for internal and external communications relevant to the BCMS and establish, implement and maintain procedures for communication before, during and after a disruption."),
        ("7", "7.5", "Documented information",
         "The BCMS shall include documented information required by this standard and determined by the organization as necessary for BCMS effectiveness. Establish controls for creation, updating, and control of documented information."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement and control the processes needed to meet requirements and to implement the actions for addressing risks and opportunities, by establishing criteria for the processes and implementing control of the processes in accordance with the criteria."),
        ("8", "8.2", "Business impact analysis and risk assessment",
         "Implement and maintain a business impact analysis process that identifies activities supporting provision of products and services, assesses impacts over time of not performing activities, sets prioritized timeframes for resuming activities, and identifies dependencies and supporting resources."),
        ("8", "8.3", "Business continuity strategies and solutions",
         "Identify and select business continuity strategies and solutions based on the outputs from the business impact analysis and risk assessment, addressing how to protect prioritized activities, stabilize and continue them during disruption, resume them after disruption, and manage the impacts."),
        ("8", "8.4", "Business continuity plans and procedures",
         "Establish, implement and maintain business continuity plans and procedures that define the purpose and scope, activation criteria, implementation procedures, roles and responsibilities, communication requirements, and interdependencies."),
        ("8", "8.5", "Exercise programme",
         "Implement and maintain an exercise programme that validates the completeness and currency of business continuity plans and procedures, identifies opportunities for improvement, and is consistent with the scope and objectives of the BCMS."),
        ("8", "8.6", "Evaluation of business continuity documentation and capabilities",
         "Evaluate the suitability, adequacy and effectiveness of the business impact analysis, risk assessment, strategies, solutions, plans and procedures through reviews, exercises and post-incident analysis."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Determine what needs to be monitored and measured, the methods for monitoring, measurement, analysis and evaluation, when they shall be performed, and when the results shall be analysed and evaluated."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to provide information on whether the BCMS conforms to the organization's own requirements and to this standard, and is effectively implemented and maintained."),
        ("9", "9.3", "Management review",
         "Top management shall review the BCMS at planned intervals to ensure its continuing suitability, adequacy and effectiveness, considering the status of previous actions, changes in context, BCMS performance including trends, exercise and test results, and risks."),
        ("10", "10.1", "Nonconformity and corrective action",
         "When a nonconformity occurs, react to the nonconformity by taking action to control and correct it, evaluate the need for action to eliminate root causes, implement any action needed, review the effectiveness of corrective action taken, and make changes to the BCMS if necessary."),
        ("10", "10.2", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the BCMS."),
    ],
    "ISO27001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose and that affect its ability to achieve the intended outcomes of the information security management system."),
        ("4", "4.2", "Understanding the needs and expectations of interested parties",
         "Determine the interested parties relevant to the ISMS, their requirements relevant to information security, and which requirements will be addressed through the ISMS."),
        ("4", "4.3", "Determining the scope of the information security management system",
         "Determine the boundaries and applicability of the ISMS to establish its scope, considering the external and internal issues, the requirements of interested parties, and interfaces and dependencies between activities performed by the organization and those performed by other organizations."),
        ("4", "4.4", "Information security management system",
         "Establish, implement, maintain and continually improve an ISMS, including the processes needed and their interactions."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment by ensuring the information security policy and objectives are established and compatible with the strategic direction, ensuring integration of ISMS requirements into business processes, and ensuring resources are available."),
        ("5", "5.2", "Policy",
         "Top management shall establish an information security policy that is appropriate to the purpose of the organization, includes information security objectives or provides the framework for setting them, and includes commitments to satisfy applicable requirements and continual improvement."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure that the responsibilities and authorities for roles relevant to information security are assigned and communicated within the organization."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine the risks and opportunities that need to be addressed to ensure the ISMS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement."),
        ("6", "6.1.2", "Information security risk assessment",
         "Define and apply an information security risk assessment process that establishes and maintains information security risk criteria, ensures consistent, valid and comparable results, identifies information security risks, analyses and evaluates risks."),
        ("6", "6.1.3", "Information security risk treatment",
         "Define and apply an information security risk treatment process to select appropriate risk treatment options, determine all controls necessary to implement the treatment options, compare with Annex A to verify no necessary controls have been omitted, and produce a Statement of Applicability."),
        ("6", "6.2", "Information security objectives and planning to achieve them",
         "Establish information security objectives at relevant functions and levels that are consistent with the information security policy, are measurable, take into account applicable requirements and risk assessment/treatment results, are monitored, communicated, and updated."),
        ("6", "6.3", "Planning of changes",
         "When the organization determines the need for changes to the ISMS, the changes shall be carried out in a planned manner."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the ISMS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects information security performance, ensure they are competent, and take actions to acquire the necessary competence."),
        ("7", "7.3", "Awareness",
         "Persons doing work under the organization's control shall be aware of the information security policy, their contribution to the ISMS effectiveness, and the implications of not conforming with ISMS requirements."),
        ("7", "7.4", "Communication",
         "Determine the need for internal and external communications relevant to the ISMS including what, when, with whom, and how to communicate."),
        ("7", "7.5", "Documented information",
         "The ISMS shall include documented information required by this standard and determined by the organization as necessary for ISMS effectiveness. Control creation, updating, and control of documented information ensuring appropriate availability, adequacy and protection."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement and control the processes needed to meet information security requirements and to implement the actions for addressing risks and opportunities."),
        ("8", "8.2", "Information security risk assessment",
         "Perform information security risk assessments at planned intervals or when significant changes are proposed or occur, considering the criteria established in 6.1.2."),
        ("8", "8.3", "Information security risk treatment",
         "Implement the information security risk treatment plan and retain documented information of the results."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Determine what needs to be monitored and measured, the methods for monitoring, measurement, analysis and evaluation, when they shall be performed, who shall monitor and measure, and when the results shall be analysed and evaluated."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to provide information on whether the ISMS conforms to the organization's own requirements and to this standard, and is effectively implemented and maintained."),
        ("9", "9.3", "Management review",
         "Top management shall review the ISMS at planned intervals to ensure its continuing suitability, adequacy and effectiveness, considering the status of actions from previous reviews, changes in context, feedback on information security performance, and results of risk assessments and risk treatment plans."),
        ("10", "10.1", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the ISMS."),
        ("10", "10.2", "Nonconformity and corrective action",
         "When a nonconformity occurs, react to the nonconformity, evaluate the need for action to eliminate the root causes, implement any action needed, review the effectiveness of corrective action, and make changes to the ISMS if necessary."),
    ],
    "ISO37001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose and that affect its ability to achieve the intended outcomes of its anti-bribery management system."),
        ("4", "4.2", "Understanding the needs and expectations of stakeholders",
         "Determine the stakeholders relevant to the ABMS and their requirements relevant to anti-bribery, including those stakeholders whose relevant needs and expectations become compliance obligations."),
        ("4", "4.3", "Determining the scope of the anti-bribery management system",
         "Determine the boundaries and applicability of the ABMS to establish its scope, considering external and internal issues, requirements of stakeholders, and the results of the bribery risk assessment."),
        ("4", "4.4", "Anti-bribery management system",
         "Establish, implement, maintain and continually improve an ABMS, including the processes needed and their interactions."),
        ("4", "4.5", "Bribery risk assessment",
         "Regularly assess the bribery risks facing the organization to identify, analyse and evaluate bribery risks, taking into account the factors and categories of bribery risk the organization faces."),
        ("5", "5.1", "Leadership and commitment",
         "Top management and the governing body shall demonstrate leadership and commitment by ensuring the ABMS is established, implemented, maintained and reviewed, providing adequate and appropriate resources, and communicating the anti-bribery policy internally and externally."),
        ("5", "5.2", "Anti-bribery policy",
         "Top management shall establish an anti-bribery policy that prohibits bribery, requires compliance with anti-bribery laws, is appropriate to the purpose of the organization, provides a framework for setting objectives, and includes a commitment to satisfy applicable requirements and continual improvement."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure responsibilities and authorities for the ABMS are assigned and communicated. The anti-bribery compliance function shall have responsibility and authority for overseeing the design and implementation of the ABMS."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine the risks and opportunities that need to be addressed to ensure the ABMS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement."),
        ("6", "6.2", "Anti-bribery objectives and planning to achieve them",
         "Establish anti-bribery objectives at relevant functions and levels that are consistent with the anti-bribery policy, are measurable, take into account applicable requirements and bribery risk assessment results, are monitored, communicated, and updated."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the ABMS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects anti-bribery performance, ensure they are competent on the basis of education, training or experience, and take actions to acquire the necessary competence."),
        ("7", "7.3", "Awareness and training",
         "Ensure persons doing work under the organization's control are aware of the anti-bribery policy, their contribution to ABMS effectiveness, the implications of not conforming, and how to recognize and deal with bribery risks and solicitation. Provide anti-bribery training appropriate to bribery risks."),
        ("7", "7.4", "Communication",
         "Determine the need for internal and external communications relevant to the ABMS including what, when, with whom, and how to communicate."),
        ("7", "7.5", "Documented information",
         "The ABMS shall include documented information required by this standard and determined by the organization as necessary for ABMS effectiveness, including the bribery risk assessment, anti-bribery policy, procedures, and records of actions taken."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement and control the processes needed to meet anti-bribery requirements by establishing criteria for the processes and implementing control of the processes."),
        ("8", "8.2", "Due diligence",
         "Assess the nature and extent of bribery risks in relation to specific transactions, projects, activities, business associates and personnel in categories that have been identified as posing a more than low bribery risk."),
        ("8", "8.3", "Financial controls",
         "Implement financial controls to manage bribery risk, including procedures designed to ensure that financial exposures to bribery are managed and that financial records adequately and accurately record transactions."),
        ("8", "8.4", "Non-financial controls",
         "Implement non-financial controls to manage bribery risk, including controls over gifts, hospitality, donations and similar benefits, and controls over the engagement of business associates and the hiring and remuneration of personnel."),
        ("8", "8.5", "Anti-bribery commitments by business associates",
         "Apply anti-bribery controls with respect to business associates that pose a more than low bribery risk, including requiring business associates to implement anti-bribery controls or providing anti-bribery commitments."),
        ("8", "8.6", "Anti-bribery commitments by personnel",
         "Implement procedures requiring personnel in positions identified as posing a more than low bribery risk to provide a declaration of compliance with the anti-bribery policy."),
        ("8", "8.7", "Gifts, hospitality, donations and similar benefits",
         "Implement procedures to prevent bribery in relation to gifts, hospitality, donations and similar benefits that are offered by, or on behalf of, the organization."),
        ("8", "8.8", "Managing inadequacy of anti-bribery controls",
         "Implement procedures to manage any bribery risk identified where the organization's existing anti-bribery controls are assessed as being inadequate and where additional controls cannot reasonably be implemented."),
        ("8", "8.9", "Raising concerns",
         "Implement procedures to encourage and enable persons to report attempted, suspected or actual bribery or violation of the anti-bribery policy, in confidence and without fear of reprisal."),
        ("8", "8.10", "Investigating and dealing with bribery",
         "Implement procedures for investigating and dealing with reported or suspected bribery, taking appropriate action including reporting to authorities where required by law, and disciplining personnel who violate the anti-bribery policy."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Determine what needs to be monitored and measured in relation to anti-bribery performance, the methods, when they shall be performed, and when the results shall be analysed and evaluated."),
        ("9", "9.2", "Internal audit",
         "Conduct internal audits at planned intervals to provide information on whether the ABMS conforms to the organization's own requirements and to this standard, and is effectively implemented and maintained."),
        ("9", "9.3", "Management review",
         "Top management and the governing body shall review the ABMS at planned intervals to ensure its continuing suitability, adequacy and effectiveness, considering audit results, bribery reports, effectiveness of actions taken, and emerging best practices."),
        ("9", "9.4", "Anti-bribery compliance function reviews",
         "The anti-bribery compliance function shall on a regular basis review whether the ABMS is adequately designed, implemented and maintained, and report to top management and the governing body."),
        ("10", "10.1", "Nonconformity and corrective action",
         "When a nonconformity occurs, react to the nonconformity, evaluate the need for action to eliminate the root causes, implement any action needed, review the effectiveness of corrective action taken, and make changes to the ABMS if necessary."),
        ("10", "10.2", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the ABMS."),
    ],
    "ISO39001": [
        ("4", "4.1", "Understanding the organization and its context",
         "Determine external and internal issues relevant to the organization's purpose and that affect its ability to achieve the intended outcomes of its road traffic safety management system."),
        ("4", "4.2", "Understanding the needs and expectations of interested parties",
         "Determine the interested parties relevant to the RTS MS and their relevant needs and expectations, including road users, communities, regulatory authorities, employees, and other organizations in the road traffic system."),
        ("4", "4.3", "Determining the scope of the RTS management system",
         "Determine the boundaries and applicability of the RTS MS to establish its scope, considering external and internal issues, requirements of interested parties, and the organization's role as a generator or part of the road traffic system."),
        ("4", "4.4", "Road traffic safety management system",
         "Establish, implement, maintain and continually improve an RTS MS, including the processes needed and their interactions."),
        ("5", "5.1", "Leadership and commitment",
         "Top management shall demonstrate leadership and commitment by taking accountability for effectiveness of the RTS MS, ensuring the policy and objectives are established and compatible with strategic direction, and ensuring resources are available."),
        ("5", "5.2", "Policy",
         "Top management shall establish an RTS policy that is appropriate to the purpose and context of the organization, provides a framework for setting objectives, includes a commitment to satisfy applicable requirements and to the long-term goal of eliminating death and serious injury related to road traffic crashes."),
        ("5", "5.3", "Organizational roles, responsibilities and authorities",
         "Top management shall ensure responsibilities and authorities for relevant roles are assigned and communicated within the organization, including responsibility for RTS MS conformity and reporting on RTS performance to top management."),
        ("6", "6.1", "Actions to address risks and opportunities",
         "Determine the risks and opportunities that need to be addressed to ensure the RTS MS can achieve its intended outcomes, prevent or reduce undesired effects, and achieve continual improvement of road traffic safety performance."),
        ("6", "6.2", "Road traffic safety performance factors",
         "Identify the road traffic safety performance factors that the organization can influence, including exposure factors (distance travelled, volume of goods), final outcome factors (number of fatalities and serious injuries), and intermediate outcome factors (speed, safety equipment use, vehicle condition, road design, driver fitness)."),
        ("6", "6.3", "RTS objectives and planning to achieve them",
         "Establish RTS objectives and targets at relevant functions and levels that are consistent with the RTS policy, are measurable, take into account applicable requirements and RTS performance factors, are monitored, communicated, and updated."),
        ("7", "7.1", "Resources",
         "Determine and provide the resources needed for the establishment, implementation, maintenance and continual improvement of the RTS MS."),
        ("7", "7.2", "Competence",
         "Determine the necessary competence of persons doing work that affects RTS performance, ensure they are competent on the basis of education, training or experience, and take actions to acquire the necessary competence."),
        ("7", "7.3", "Awareness",
         "Persons doing work under the organization's control shall be aware of the RTS policy, relevant RTS objectives and targets, their contribution to RTS MS effectiveness, and the implications of not conforming with RTS MS requirements."),
        ("7", "7.4", "Communication",
         "Determine the need for internal and external communications relevant to the RTS MS including what, when, with whom, and how to communicate."),
        ("7", "7.5", "Documented information",
         "The RTS MS shall include documented information required by this standard and determined by the organization as necessary for RTS MS effectiveness. Control creation, updating, and control of documented information."),
        ("8", "8.1", "Operational planning and control",
         "Plan, implement and control the processes needed to meet RTS MS requirements and to implement actions for addressing risks and opportunities, by establishing criteria for the processes and implementing control in accordance with the criteria."),
        ("8", "8.2", "Emergency preparedness and response",
         "Establish, implement and maintain processes for preparing for and responding to potential road traffic emergency situations and incidents, including planned response actions, post-crash procedures, periodic testing, and review after incidents."),
        ("9", "9.1", "Monitoring, measurement, analysis and evaluation",
         "Determine what needs to be monitored and measured in relation to RTS performance, the methods, when they shall be performed, and when the results shall be analysed and evaluated, including RTS performance factors and the achievement of RTS objectives and targets."),
        ("9", "9.2", "Investigation of road traffic crashes and other road traffic incidents",
         "Establish, implement and maintain processes for the investigation of road traffic crashes and other road traffic incidents involving the organization, to determine contributing factors and identify corrective actions and opportunities for improvement."),
        ("9", "9.3", "Internal audit",
         "Conduct internal audits at planned intervals to provide information on whether the RTS MS conforms to the organization's own requirements and to this standard, and is effectively implemented and maintained."),
        ("9", "9.4", "Management review",
         "Top management shall review the RTS MS at planned intervals to ensure its continuing suitability, adequacy and effectiveness, considering audit results, RTS performance trends, crash investigation findings, and opportunities for improvement."),
        ("10", "10.1", "Nonconformity and corrective action",
         "When a nonconformity occurs, react to the nonconformity, evaluate the need for action to eliminate the root causes, implement any action needed, review the effectiveness of corrective action taken, and make changes to the RTS MS if necessary."),
        ("10", "10.2", "Continual improvement",
         "Continually improve the suitability, adequacy and effectiveness of the RTS MS and road traffic safety performance."),
    ],
}


# ============================================================================
# Curated Cross-References
# (source standard, source clause, target standard, target clause, type, notes)
# ============================================================================

DOMAIN_CROSS_REFERENCES = [
    ("ISO45001", "8.2", "ISO14001", "8.2", "RELATED",
     "Both address emergency preparedness and response - OH&S for worker safety, Environmental for spills/releases"),
    ("ISO22301", "8.4", "ISO27001", "8.1", "RELATED",
     "BC plans must address information security continuity requirements"),
    ("ISO37001", "8.2", "ISO9001", "8.4", "SUPPORTING",
     "Anti-bribery due diligence on business associates supports external provider evaluation"),
    ("ISO45001", "6.1", "ISO9001", "6.1", "RELATED",
     "OH&S hazard identification feeds into overall organizational risk management"),
    ("ISO14001", "6.1", "ISO45001", "6.1", "RELATED",
     "Environmental compliance obligations often overlap with OH&S legal requirements on construction sites"),
    ("ISO39001", "8.1", "ISO45001", "8.1", "RELATED",
     "RTS operational controls overlap with OH&S controls for transport and commuting"),
    ("ISO27001", "7.3", "ISO37001", "7.3", "SUPPORTING",
     "Security awareness training can incorporate anti-bribery awareness modules"),
    ("ISO9001", "10.2", "ISO14001", "10.2", "RELATED",
     "Corrective action procedures apply to both quality nonconformities and environmental incidents"),
    ("ISO22301", "9.3", "ISO9001", "9.3", "SUPPORTING",
     "Business continuity performance data should feed into quality management reviews"),
    ("ISO39001", "9.1", "ISO45001", "10.2", "RELATED",
     "Road traffic crash investigations feed into OH&S incident and nonconformity management"),
]


def generate_hls_cross_references(standard_codes: list = None) -> list[tuple]:
    """
    Generate EQUIVALENT cross-references for every shared HLS sub-clause
    across every pair of standards.

    For N standards and M common sub-clauses this yields N*(N-1)/2 * M
    edges (21 * 21 = 441 for the full catalog). The source is always the
    standard that comes first in ``standard_codes``.

    Returns:
        List of (source code, clause number, target code, clause number,
        "EQUIVALENT", None) tuples
    """
    codes = standard_codes or STANDARD_CODES
    refs = []

    for i, source_code in enumerate(codes):
        for target_code in codes[i + 1:]:
            for clause_number in COMMON_HLS_SUB_CLAUSES:
                refs.append((source_code, clause_number, target_code, clause_number, "EQUIVALENT", None))

    return refs


def all_catalog_cross_references() -> list[tuple]:
    """HLS equivalences followed by the curated domain links."""
    return generate_hls_cross_references() + DOMAIN_CROSS_REFERENCES
